from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from time import perf_counter
from typing import Any

import httpx

from agentic.core.config.loader import load_app_config
from agentic.core.config.schema import DEFAULT_OPENAI_BASE_URL, AppConfig
from agentic.core.providers.base import Model, Provider
from agentic.core.providers.types import ChatMessage, GenerateTextResult, RequestParameters, Role
from agentic.core.providers.validation import validate_model, validate_request_parameters
from agentic.core.runtime.errors import AgenticError, ConfigError
from agentic.core.strategy.chat_completions import (
    ChatCompletionsConfig,
    ChatCompletionsRequest,
    build_request_body,
    execute_request,
    parse_response,
)
from agentic.core.telemetry.logging import get_logger
from agentic.core.transport.client import DEFAULT_TIMEOUT_SECONDS, new_client

OPENAI_CHAT_MODELS: tuple[Model, ...] = (
    Model(name="gpt-4.1", parameters=("temperature", "top_p")),
    Model(name="gpt-5", parameters=()),
)

logger = get_logger("agentic.providers.openai_chat")


class OpenAIChatCompletionsProvider(Provider):
    name = "OpenAI Chat Completions"

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None = DEFAULT_OPENAI_BASE_URL,
        *,
        http_client: httpx.Client | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        models: Sequence[Model] = OPENAI_CHAT_MODELS,
    ) -> None:
        if not api_key:
            raise ConfigError("openai.api_key is required in config file")
        self._api_key = api_key
        self.base_url = base_url or DEFAULT_OPENAI_BASE_URL
        self.timeout_seconds = timeout_seconds or DEFAULT_TIMEOUT_SECONDS
        self._owns_client = http_client is None
        self._http_client = http_client or new_client(timeout_seconds)
        self._models = tuple(models)
        self._by_name = {model.name: model for model in self._models}
        if len(self._by_name) != len(self._models):
            raise ConfigError(f"duplicate model names in catalog for provider {self.name}")

    @classmethod
    def from_config(cls, cfg: AppConfig, *, http_client: httpx.Client | None = None) -> OpenAIChatCompletionsProvider:
        return cls(
            cfg.openai.api_key,
            cfg.openai.base_url,
            http_client=http_client,
            timeout_seconds=cfg.runtime.request_timeout_seconds,
        )

    @classmethod
    def from_config_file(cls, path: str | Path, *, http_client: httpx.Client | None = None) -> OpenAIChatCompletionsProvider:
        return cls.from_config(load_app_config(path), http_client=http_client)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r}, models={[m.name for m in self._models]!r})"

    def __enter__(self) -> OpenAIChatCompletionsProvider:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http_client.close()

    def available_models(self) -> tuple[Model, ...]:
        return self._models

    def get_model(self, model_name: str) -> Model:
        validate_model(self._models, model_name, self.name)
        return self._by_name[model_name]

    def available_request_parameters(self, model_name: str) -> tuple[str, ...]:
        model = self._by_name.get(model_name)
        return model.available_request_parameters() if model else ()

    def config(self) -> dict[str, Any]:
        return {"api_key": self._api_key, "base_url": self.base_url}

    def generate_text(
        self,
        prompt: str,
        model_name: str,
        parameters: RequestParameters | None = None,
        *,
        timeout: float | None = None,
    ) -> GenerateTextResult:
        params = dict(parameters or {})
        validate_model(self._models, model_name, self.name)
        validate_request_parameters(self.available_request_parameters(model_name), params, model_name)

        body = build_request_body(
            ChatCompletionsRequest(
                model=model_name,
                messages=[ChatMessage(role=Role.USER, content=prompt)],
                request_params=params,
            )
        )
        cfg = ChatCompletionsConfig(
            base_url=self.base_url,
            api_key=self._api_key,
            http_client=self._http_client,
            timeout=timeout if timeout is not None else self.timeout_seconds,
        )

        started = perf_counter()
        status: int | None = None
        try:
            response, status = execute_request(cfg, body)
            result = parse_response(response, status)
        except AgenticError as exc:
            logger.warning(
                "generate_text_failed",
                provider=self.name,
                model=model_name,
                status=status,
                latency_ms=round((perf_counter() - started) * 1000, 2),
                error_kind=exc.kind,
                error=exc.message,
            )
            raise
        logger.info(
            "generate_text_ok",
            provider=self.name,
            model=model_name,
            status=status,
            latency_ms=round((perf_counter() - started) * 1000, 2),
            total_tokens=result.usage.total_tokens,
        )
        return result
