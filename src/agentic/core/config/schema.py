from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"


class OpenAIConfig(BaseModel):
    api_key: str | None = None
    base_url: str = DEFAULT_OPENAI_BASE_URL


class RuntimeConfig(BaseModel):
    request_timeout_seconds: float = Field(default=60, gt=0)


class TelemetryConfig(BaseModel):
    log_level: str = "INFO"
    json_logs: bool = True


class AppConfig(BaseModel):
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
