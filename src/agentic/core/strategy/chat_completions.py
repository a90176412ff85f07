from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import BaseModel, Field, field_validator

from agentic.core.providers.types import ChatMessage, GenerateTextResult, RequestParameters, TokenUsage
from agentic.core.runtime.errors import ApiError, DecodeError, EmptyResponseError, TransportError
from agentic.core.transport.client import (
    DEFAULT_TIMEOUT_SECONDS,
    build_json_request,
    deadline_after,
    decode_json,
    execute,
    read_body,
    remaining_seconds,
)

CHAT_COMPLETIONS_ENDPOINT = "/chat/completions"


@dataclass(slots=True)
class ChatCompletionsRequest:
    model: str
    messages: list[ChatMessage]
    request_params: RequestParameters = field(default_factory=dict)


@dataclass(slots=True)
class ChatCompletionsConfig:
    base_url: str
    api_key: str
    http_client: httpx.Client
    endpoint: str = CHAT_COMPLETIONS_ENDPOINT
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS

    @property
    def url(self) -> str:
        return self.base_url.rstrip("/") + self.endpoint


class _MessageBody(BaseModel):
    content: str | None = None


class _ChoiceBody(BaseModel):
    message: _MessageBody | None = None


class _UsageBody(BaseModel):
    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)

    @field_validator("prompt_tokens", "completion_tokens", "total_tokens", mode="before")
    @classmethod
    def _null_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class _ErrorBody(BaseModel):
    message: str | None = None
    type: str | None = None
    code: str | int | None = None


class ChatCompletionsResponse(BaseModel):
    choices: list[_ChoiceBody] | None = None
    usage: _UsageBody | None = None
    error: _ErrorBody | None = None

    @property
    def error_message(self) -> str:
        return (self.error.message or "") if self.error else ""


def build_request_body(request: ChatCompletionsRequest) -> dict[str, Any]:
    """Wire body for one chat completion.

    Extra parameters are merged flat at the top level; a parameter named
    ``model`` or ``messages`` overwrites the reserved field (last write wins).
    """
    body: dict[str, Any] = {
        "model": request.model,
        "messages": [message.to_wire() for message in request.messages],
    }
    for key, value in request.request_params.items():
        body[key] = value
    return body


def execute_request(config: ChatCompletionsConfig, body: dict[str, Any]) -> tuple[ChatCompletionsResponse, int]:
    headers = {"Authorization": f"Bearer {config.api_key}"}
    # config.timeout bounds the whole round trip, not each httpx phase.
    deadline = deadline_after(config.timeout)
    request = build_json_request(
        config.http_client,
        "POST",
        config.url,
        body,
        headers,
        timeout=remaining_seconds(deadline, config.url),
    )
    response = execute(config.http_client, request)
    status = response.status_code
    try:
        remaining_seconds(deadline, config.url)
    except TransportError:
        response.close()
        raise
    raw = read_body(response, deadline=deadline)
    try:
        return decode_json(raw, ChatCompletionsResponse, status=status), status
    except DecodeError:
        if status == httpx.codes.OK:
            raise
        # Non-JSON error pages count as "no structured error body".
        return ChatCompletionsResponse(), status


def parse_response(response: ChatCompletionsResponse, status: int) -> GenerateTextResult:
    error = response.error
    if status != httpx.codes.OK:
        if response.error_message:
            raise ApiError(
                f"API error (status {status}): {error.message} (type: {error.type or ''}, code: {_code(error.code)})",
                status=status,
                error_type=error.type,
                error_code=_code(error.code) or None,
            )
        raise ApiError(f"API request failed with status {status}", status=status)

    if response.error_message:
        raise ApiError(
            f"API error: {error.message} (type: {error.type or ''})",
            status=status,
            error_type=error.type,
            error_code=_code(error.code) or None,
        )

    if not response.choices:
        raise EmptyResponseError(status=status)

    usage = response.usage or _UsageBody()
    message = response.choices[0].message
    return GenerateTextResult(
        text=(message.content if message else None) or "",
        usage=TokenUsage(
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            total_tokens=usage.total_tokens,
        ),
    )


def _code(code: str | int | None) -> str:
    return "" if code is None else str(code)
