from __future__ import annotations

import dataclasses

import pytest

from agentic.core.providers.types import ChatMessage, GenerateTextResult, Role, TokenUsage


def test_chat_message_wire_shape():
    assert ChatMessage(role=Role.USER, content="hello").to_wire() == {"role": "user", "content": "hello"}


def test_token_usage_trusts_upstream_totals():
    usage = TokenUsage(prompt_tokens=3, completion_tokens=4, total_tokens=100)
    assert usage.total_tokens == 100


def test_token_usage_rejects_negative_counts():
    with pytest.raises(ValueError, match="prompt_tokens"):
        TokenUsage(prompt_tokens=-1)


def test_result_is_immutable_and_defaults_to_zero_usage():
    result = GenerateTextResult(text="")
    assert result.usage == TokenUsage(0, 0, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.text = "changed"  # type: ignore[misc]
