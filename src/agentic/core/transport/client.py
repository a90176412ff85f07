"""JSON-over-HTTP helpers shared by every provider strategy."""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from agentic.core.runtime.errors import DecodeError, ReadError, TransportError

DEFAULT_TIMEOUT_SECONDS = 60.0

ModelT = TypeVar("ModelT", bound=BaseModel)


def deadline_after(timeout_seconds: float | None) -> float | None:
    """Absolute ``time.monotonic()`` instant by which a whole round trip must finish."""
    if timeout_seconds is None:
        return None
    return time.monotonic() + timeout_seconds


def remaining_seconds(deadline: float | None, url: str) -> float | None:
    if deadline is None:
        return None
    left = deadline - time.monotonic()
    if left <= 0:
        raise TransportError(f"request to {url} exceeded its deadline", url=url)
    return left


def new_client(
    timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    if not timeout_seconds:
        timeout_seconds = DEFAULT_TIMEOUT_SECONDS
    return httpx.Client(timeout=timeout_seconds, transport=transport)


def build_json_request(
    client: httpx.Client,
    method: str,
    url: str,
    body: Any = None,
    headers: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> httpx.Request:
    content: bytes | None = None
    merged = httpx.Headers()
    if body is not None:
        try:
            content = json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise TransportError(f"failed to marshal request body: {exc}", url=url) from exc
        merged["Content-Type"] = "application/json"
    merged["Accept"] = "application/json"
    if headers:
        merged.update(headers)

    extra: dict[str, Any] = {}
    if timeout is not None:
        extra["timeout"] = timeout
    return client.build_request(method, url, content=content, headers=merged, **extra)


def execute(client: httpx.Client, request: httpx.Request) -> httpx.Response:
    try:
        return client.send(request, stream=True)
    except httpx.TimeoutException as exc:
        raise TransportError(f"request to {request.url} timed out: {exc}", url=str(request.url)) from exc
    except httpx.HTTPError as exc:
        raise TransportError(f"request to {request.url} failed: {exc}", url=str(request.url)) from exc


def read_body(response: httpx.Response, deadline: float | None = None) -> bytes:
    """Read the streamed body, giving up once ``deadline`` has passed.

    httpx restarts its read timeout for every chunk, so a server trickling
    bytes is only stopped by checking the overall deadline between chunks.
    """
    url = str(response.request.url)
    chunks: list[bytes] = []
    try:
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if deadline is not None and time.monotonic() >= deadline:
                raise ReadError(f"response from {url} exceeded its deadline", url=url)
        return b"".join(chunks)
    except httpx.HTTPError as exc:
        raise ReadError(f"failed to read response body: {exc}", url=url) from exc
    finally:
        response.close()


def decode_json(body: bytes, target: type[ModelT], status: int | None = None) -> ModelT:
    try:
        return target.model_validate_json(body)
    except SchemaValidationError as exc:
        raise DecodeError(f"failed to decode response: {exc}", status=status) from exc
