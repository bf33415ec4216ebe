"""Shared test fixtures for Cloud Inference tests."""
from typing import List

import httpx
import pytest

from src.api.models.requests import EmailRequest
from src.llm.base import ChatClientConfig
from src.llm.client import ChatClient


def chat_completion(content: str, finish_reason: str = "stop") -> dict:
    """Body of a successful single-choice chat-completion reply."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "deepseek-chat",
        "choices": [
            {
                "index": 0,
                "finish_reason": finish_reason,
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


class StubUpstream:
    """
    Scripted chat-completion endpoint for httpx.MockTransport.

    Replays the queued responses in order; exceptions are raised instead of
    returned. The last entry repeats once the queue is exhausted. Every
    request received is kept in ``requests``.
    """

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def client_config() -> ChatClientConfig:
    return ChatClientConfig(
        provider="deepseek",
        base_url="https://api.deepseek.test/",
        api_key="  test-key\n",
        model="deepseek-chat",
    )


@pytest.fixture
def make_chat_client(client_config):
    """
    Build a ChatClient wired to a StubUpstream.

    Returns (client, upstream, sleeps); ``sleeps`` records every backoff
    the client asked for instead of actually sleeping.
    """

    def _make(*responses, handler=None):
        upstream = StubUpstream(responses)
        sleeps: List[float] = []

        async def record_sleep(seconds: float) -> None:
            sleeps.append(seconds)

        transport = httpx.MockTransport(handler or upstream)
        client = ChatClient(
            client_config,
            http_client=httpx.AsyncClient(transport=transport),
            sleep=record_sleep,
        )
        return client, upstream, sleeps

    return _make


@pytest.fixture
def ok_response():
    """Factory for 200 chat-completion responses."""

    def _ok(content: str) -> httpx.Response:
        return httpx.Response(200, json=chat_completion(content))

    return _ok


@pytest.fixture
def sample_emails() -> List[EmailRequest]:
    """Three emails for batch classification."""
    return [
        EmailRequest(id="email-1", content="Your invoice #4411 is attached. Payment due Friday."),
        EmailRequest(id="email-2", content="<p>Congratulations! You won a <b>free cruise</b>.</p>"),
        EmailRequest(id="email-3", content="Can we move tomorrow's standup to 10am?"),
    ]
