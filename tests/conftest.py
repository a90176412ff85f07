from __future__ import annotations

import httpx
import pytest

from agentic.core.providers.openai_chat import OpenAIChatCompletionsProvider


def chat_reply(content: str = "Hi", usage: tuple[int, int, int] = (5, 2, 7), status: int = 200) -> httpx.Response:
    prompt_tokens, completion_tokens, total_tokens = usage
    return httpx.Response(
        status,
        json={
            "choices": [{"message": {"role": "assistant", "content": content}}],
            "usage": {
                "prompt_tokens": prompt_tokens,
                "completion_tokens": completion_tokens,
                "total_tokens": total_tokens,
            },
        },
    )


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def mock_provider(sent_requests):
    clients: list[httpx.Client] = []

    def _make(reply=None, **kwargs) -> OpenAIChatCompletionsProvider:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if reply is None:
                return chat_reply()
            return reply(request)

        client = httpx.Client(transport=httpx.MockTransport(handler), timeout=60)
        clients.append(client)
        return OpenAIChatCompletionsProvider("test-key", "https://api.test/v1", http_client=client, **kwargs)

    yield _make
    for client in clients:
        client.close()
