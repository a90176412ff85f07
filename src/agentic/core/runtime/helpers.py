from __future__ import annotations

from agentic.core.providers.base import Provider
from agentic.core.providers.types import GenerateTextResult, RequestParameters
from agentic.core.runtime.errors import AgenticError, compact_error_summary
from agentic.core.telemetry.logging import get_logger

logger = get_logger("agentic.runtime")


def generate_text_or_abort(
    provider: Provider,
    prompt: str,
    model_name: str,
    parameters: RequestParameters | None = None,
    *,
    timeout: float | None = None,
) -> GenerateTextResult:
    """Return the generated text or stop the process.

    Recoverable errors from the provider become ``SystemExit``; use
    ``provider.generate_text`` directly to handle them instead.
    """
    try:
        return provider.generate_text(prompt, model_name, parameters, timeout=timeout)
    except AgenticError as exc:
        logger.error("generate_text_aborted", provider=provider.name, model=model_name, error=exc.to_dict())
        raise SystemExit(compact_error_summary(exc)) from exc
