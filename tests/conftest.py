"""Pytest configuration and shared fixtures."""
import json
from typing import Any

import httpx
import pytest

from chotto.llm import ChatRequest, ChatTurn, Role


class FakeVendor:
    """Callable for httpx.MockTransport that records every request.

    Answers with the configured status and body, or raises the configured
    transport error.
    """

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {}
        self.raw: bytes | None = None
        self.error: type[httpx.TransportError] | None = None

    def respond(self, status_code: int = 200, body: Any = None, raw: bytes | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.raw = raw

    def fail_with(self, error: type[httpx.TransportError]) -> None:
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error("vendor unreachable", request=request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    def payload(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.calls[index].content)


@pytest.fixture
def vendor():
    """Return a fake vendor answering 200 with an empty JSON object."""
    return FakeVendor()


@pytest.fixture
async def http_client(vendor):
    """HTTP client whose requests are answered by the fake vendor."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(vendor))
    yield client
    await client.aclose()


def make_request(model: str = "gpt-4o", *contents: str, api_key: str = "sk-test", **kwargs: Any) -> ChatRequest:
    """Build a request alternating user/assistant turns, starting with user."""
    contents = contents or ("Hello",)
    turns = tuple(
        ChatTurn(role=Role.USER if i % 2 == 0 else Role.ASSISTANT, content=text)
        for i, text in enumerate(contents)
    )
    return ChatRequest(model=model, messages=turns, api_key=api_key, **kwargs)


@pytest.fixture
def chat_request():
    """Return the request builder."""
    return make_request
