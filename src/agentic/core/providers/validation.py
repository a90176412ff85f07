from __future__ import annotations

from collections.abc import Iterable, Sequence

from agentic.core.providers.base import Model
from agentic.core.providers.types import RequestParameters
from agentic.core.runtime.errors import ModelNotFoundError, UnsupportedParameterError


def validate_model(models: Iterable[Model], model_name: str, provider_name: str) -> None:
    if not any(model.name == model_name for model in models):
        raise ModelNotFoundError(model_name, provider_name)


def validate_request_parameters(
    available: Sequence[str],
    requested: RequestParameters,
    model_name: str,
) -> None:
    allowed = set(available)
    for key in requested:
        if key not in allowed:
            raise UnsupportedParameterError(key, model_name, available)
