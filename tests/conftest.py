"""Pytest fixtures and shared test configuration.

Fixtures:
    - client_config: Flowise settings pointing at a fake host
    - fake_transport: In-memory transport recording every call
    - controller: ConversationController wired to the fake transport
    - async_client: HTTPX client for the host application
"""

import asyncio
from collections.abc import AsyncIterator, Sequence
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from ragchat.api.app import create_app
from ragchat.config import ClientConfig
from ragchat.conversation.controller import ConversationController
from ragchat.models.schemas import AnswerPayload, HistoryTurn

FIXED_TIME = datetime(2024, 5, 1, 14, 30)


class FakeTransport:
    """Transport double returning queued replies.

    Queued exceptions are raised instead of returned. When ``gate`` is set to
    an asyncio.Event, send() suspends until the event is set.
    """

    def __init__(self, replies: Sequence[AnswerPayload | Exception] = ()) -> None:
        self.replies = list(replies)
        self.calls: list[tuple[str, list[HistoryTurn]]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def send(self, query: str, history: Sequence[HistoryTurn]) -> AnswerPayload:
        self.calls.append((query, list(history)))
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else AnswerPayload(text=f"Answer to {query}")
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def client_config() -> ClientConfig:
    """Return configuration for a fake Flowise server."""
    return ClientConfig(
        api_host="http://flowise.test",
        chatflow_id="test-flow",
        api_key=None,
        timeout=5.0,
        max_visible_sources=3,
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def controller(fake_transport: FakeTransport) -> ConversationController:
    """Create a controller with a fixed clock and the fake transport."""
    return ConversationController(fake_transport, clock=lambda: FIXED_TIME)


@pytest.fixture
async def async_client() -> AsyncIterator[AsyncClient]:
    """Create async HTTP client for the host application.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
