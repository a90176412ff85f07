from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from agentic.core.providers.types import GenerateTextResult, RequestParameters


@dataclass(frozen=True, slots=True)
class Model:
    name: str
    parameters: tuple[str, ...] = field(default_factory=tuple)

    def available_request_parameters(self) -> tuple[str, ...]:
        return self.parameters


class Provider(ABC):
    """A remote endpoint with a fixed catalog of models and one generation call."""

    name: str

    @abstractmethod
    def available_models(self) -> Sequence[Model]:
        raise NotImplementedError

    @abstractmethod
    def get_model(self, model_name: str) -> Model:
        raise NotImplementedError

    @abstractmethod
    def available_request_parameters(self, model_name: str) -> tuple[str, ...]:
        raise NotImplementedError

    @abstractmethod
    def config(self) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def generate_text(
        self,
        prompt: str,
        model_name: str,
        parameters: RequestParameters | None = None,
        *,
        timeout: float | None = None,
    ) -> GenerateTextResult:
        raise NotImplementedError
