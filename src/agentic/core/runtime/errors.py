from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any


class AgenticError(Exception):
    """Base class for every recoverable failure surfaced to callers."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, **self.details()}


class ConfigError(AgenticError, ValueError):
    kind = "config"


class ValidationError(AgenticError):
    kind = "validation"


class ModelNotFoundError(ValidationError):
    kind = "model_not_found"

    def __init__(self, model: str, provider: str) -> None:
        super().__init__(f"model {model} is not available in provider {provider}")
        self.model = model
        self.provider = provider

    def details(self) -> dict[str, Any]:
        return {"model": self.model, "provider": self.provider}


class UnsupportedParameterError(ValidationError):
    kind = "unsupported_parameter"

    def __init__(self, parameter: str, model: str, available: Sequence[str]) -> None:
        self.parameter = parameter
        self.model = model
        self.available = tuple(available)
        super().__init__(
            f"request parameter '{parameter}' is not available for model {model}. "
            f"Available parameters: [{', '.join(self.available)}]"
        )

    def details(self) -> dict[str, Any]:
        return {"parameter": self.parameter, "model": self.model, "available": list(self.available)}


class TransportError(AgenticError):
    """Network, DNS, timeout and cancellation failures, deliberately not told apart."""

    kind = "transport"

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url

    def details(self) -> dict[str, Any]:
        return {"url": self.url}


class ReadError(TransportError):
    kind = "read"


class DecodeError(AgenticError):
    kind = "decode"

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status

    def details(self) -> dict[str, Any]:
        return {"status": self.status}


class ApiError(AgenticError):
    kind = "api"

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        error_type: str | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.error_type = error_type
        self.error_code = error_code

    def details(self) -> dict[str, Any]:
        return {"status": self.status, "error_type": self.error_type, "error_code": self.error_code}


class EmptyResponseError(AgenticError):
    kind = "empty_response"

    def __init__(self, message: str = "no choices in API response", status: int | None = None) -> None:
        super().__init__(message)
        self.status = status

    def details(self) -> dict[str, Any]:
        return {"status": self.status}


def _compact_message(message: str, max_len: int = 220) -> str:
    msg = re.sub(r"\s+", " ", message)
    return msg.strip()[:max_len]


def compact_error_summary(exc: Exception, max_len: int = 220) -> str:
    return f"{exc.__class__.__name__}: {_compact_message(str(exc), max_len=max_len)}"
