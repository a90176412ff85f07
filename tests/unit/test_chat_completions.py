from __future__ import annotations

import pytest

from agentic.core.providers.types import ChatMessage, GenerateTextResult, Role, TokenUsage
from agentic.core.runtime.errors import ApiError, EmptyResponseError
from agentic.core.strategy.chat_completions import (
    ChatCompletionsRequest,
    ChatCompletionsResponse,
    build_request_body,
    parse_response,
)


def _response(payload: dict) -> ChatCompletionsResponse:
    return ChatCompletionsResponse.model_validate(payload)


def test_build_request_body_flattens_parameters():
    body = build_request_body(
        ChatCompletionsRequest(
            model="gpt-4.1",
            messages=[ChatMessage(Role.USER, "Hello")],
            request_params={"temperature": 0.7, "top_p": 0.9},
        )
    )
    assert body == {
        "model": "gpt-4.1",
        "messages": [{"role": "user", "content": "Hello"}],
        "temperature": 0.7,
        "top_p": 0.9,
    }


def test_build_request_body_reserved_field_collision_is_last_write_wins():
    body = build_request_body(
        ChatCompletionsRequest(
            model="gpt-4.1",
            messages=[ChatMessage(Role.USER, "Hello")],
            request_params={"model": "other"},
        )
    )
    assert body["model"] == "other"
    assert body["messages"] == [{"role": "user", "content": "Hello"}]


def test_build_then_parse_round_trip():
    body = build_request_body(ChatCompletionsRequest(model="gpt-4.1", messages=[ChatMessage(Role.USER, "ping")]))
    assert body["messages"][0]["content"] == "ping"

    response = _response(
        {
            "choices": [{"message": {"content": "pong"}}],
            "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
        }
    )
    assert parse_response(response, 200) == GenerateTextResult(text="pong", usage=TokenUsage(10, 20, 30))


def test_error_status_with_structured_body():
    response = _response(
        {"error": {"message": "Invalid API key", "type": "authentication_error", "code": "invalid_api_key"}}
    )
    with pytest.raises(ApiError) as excinfo:
        parse_response(response, 401)

    err = excinfo.value
    assert str(err) == "API error (status 401): Invalid API key (type: authentication_error, code: invalid_api_key)"
    assert (err.status, err.error_type, err.error_code) == (401, "authentication_error", "invalid_api_key")


def test_error_status_without_body_is_generic():
    with pytest.raises(ApiError, match="API request failed with status 500") as excinfo:
        parse_response(ChatCompletionsResponse(), 500)
    assert excinfo.value.status == 500
    assert excinfo.value.error_type is None


def test_error_status_beats_choices_in_body():
    response = _response({"choices": [{"message": {"content": "ignored"}}], "error": {"message": "overloaded"}})
    with pytest.raises(ApiError, match="status 503"):
        parse_response(response, 503)


def test_blank_error_message_on_failure_status_is_generic():
    with pytest.raises(ApiError, match="API request failed with status 400"):
        parse_response(_response({"error": {"message": "", "type": "x"}}), 400)


def test_embedded_error_on_success_status():
    response = _response({"choices": [], "error": {"message": "quota exceeded", "type": "insufficient_quota"}})
    with pytest.raises(ApiError) as excinfo:
        parse_response(response, 200)
    assert str(excinfo.value) == "API error: quota exceeded (type: insufficient_quota)"
    assert excinfo.value.error_type == "insufficient_quota"


def test_integer_error_code_is_stringified():
    response = _response({"error": {"message": "bad", "type": "t", "code": 42}})
    with pytest.raises(ApiError) as excinfo:
        parse_response(response, 400)
    assert excinfo.value.error_code == "42"


@pytest.mark.parametrize("payload", [{"choices": []}, {}, {"choices": None}])
def test_empty_choices_never_yield_a_result(payload):
    with pytest.raises(EmptyResponseError, match="no choices"):
        parse_response(_response(payload), 200)


def test_missing_usage_and_null_content_default():
    result = parse_response(_response({"choices": [{"message": {"content": None}}]}), 200)
    assert result == GenerateTextResult(text="", usage=TokenUsage(0, 0, 0))


def test_partial_usage_defaults_missing_counts():
    response = _response({"choices": [{"message": {"content": "x"}}], "usage": {"total_tokens": 9, "prompt_tokens": None}})
    assert parse_response(response, 200).usage == TokenUsage(0, 0, 9)


def test_only_first_choice_is_used():
    response = _response({"choices": [{"message": {"content": "first"}}, {"message": {"content": "second"}}]})
    assert parse_response(response, 200).text == "first"
