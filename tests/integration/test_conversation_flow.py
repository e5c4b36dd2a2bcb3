"""Integration tests for the controller driving the Flowise transport.

A fake Flowise server is implemented as an httpx.MockTransport handler that
answers from a script and records every request body, so the full path from
submit() to the timeline is exercised, wire format included.
"""

import json
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_check as check

from ragchat.config import ClientConfig
from ragchat.conversation.controller import ConversationController
from ragchat.models.schemas import RequestState, Role
from ragchat.transport.flowise import FlowiseTransport
from ragchat.ui.rendering import visible_sources


class FakeFlowise:
    """Scripted prediction endpoint."""

    def __init__(self) -> None:
        self.responses: list[httpx.Response] = []
        self.bodies: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(json.loads(request.content))
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200, json={"text": "default answer"})


@pytest.fixture
def flowise() -> FakeFlowise:
    return FakeFlowise()


@pytest.fixture
async def session(
    client_config: ClientConfig, flowise: FakeFlowise
) -> AsyncIterator[ConversationController]:
    """Controller wired to the real transport over the fake server."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(flowise)) as client:
        async with ConversationController(FlowiseTransport(client_config, client=client)) as ctl:
            yield ctl


class TestConversationFlow:
    """End-to-end conversation scenarios."""

    async def test_violin_question(
        self, session: ConversationController, flowise: FakeFlowise
    ) -> None:
        flowise.responses = [
            httpx.Response(200, json={"text": "Four: G, D, A, E", "sourceDocuments": []})
        ]

        await session.submit("What strings does a violin have?")

        assert flowise.bodies == [{"question": "What strings does a violin have?", "history": []}]
        user, assistant = session.timeline
        check.equal((user.role, user.content), (Role.USER, "What strings does a violin have?"))
        check.equal((assistant.role, assistant.content), (Role.ASSISTANT, "Four: G, D, A, E"))
        check.equal(assistant.sources, ())

    async def test_follow_up_carries_history_on_the_wire(
        self, session: ConversationController, flowise: FakeFlowise
    ) -> None:
        flowise.responses = [
            httpx.Response(200, json={"text": "a1"}),
            httpx.Response(200, json={"text": "a2"}),
            httpx.Response(200, json={"text": "a3"}),
        ]

        for question in ("u1", "u2", "u3"):
            await session.submit(question)

        assert flowise.bodies[-1] == {
            "question": "u3",
            "history": [
                {"role": "userMessage", "content": "u1"},
                {"role": "apiMessage", "content": "a1"},
                {"role": "userMessage", "content": "u2"},
                {"role": "apiMessage", "content": "a2"},
            ],
        }
        assert len(session.timeline) == 6

    async def test_citations_retained_but_three_displayed(
        self, session: ConversationController, flowise: FakeFlowise
    ) -> None:
        documents = [
            {"pageContent": f"passage {i}", "metadata": {"source": f"doc{i}.pdf"}}
            for i in range(5)
        ]
        flowise.responses = [
            httpx.Response(200, json={"text": "cited", "sourceDocuments": documents})
        ]

        reply = await session.submit("cite")

        assert reply is not None
        check.equal(len(reply.sources), 5)
        check.equal(len(visible_sources(reply)), 3)
        check.equal(reply.sources[0].metadata, {"source": "doc0.pdf"})

    async def test_server_error_lands_in_timeline(
        self, session: ConversationController, flowise: FakeFlowise
    ) -> None:
        flowise.responses = [httpx.Response(500, json={"message": "service unavailable"})]

        await session.submit("hello")

        user, assistant = session.timeline
        check.equal(user.content, "hello")
        check.equal(assistant.role, Role.ASSISTANT)
        check.is_in("service unavailable", assistant.content)
        check.equal(session.request_state, RequestState.IDLE)
        check.equal(session.error, "HTTP 500: service unavailable")

    async def test_malformed_answer_then_recovery(
        self, session: ConversationController, flowise: FakeFlowise
    ) -> None:
        """A body without text is an error; the next question still works."""
        flowise.responses = [
            httpx.Response(200, json={"sourceDocuments": []}),
            httpx.Response(200, json={"text": "recovered"}),
        ]

        await session.submit("first")
        check.is_in("missing 'text'", session.timeline[-1].content)

        await session.submit("second")

        check.is_none(session.error)
        check.equal(session.timeline[-1].content, "recovered")
        # The error reply still pairs with its question in history
        check.equal(
            flowise.bodies[-1]["history"][1]["content"],
            "Error: Malformed response: missing 'text' field",
        )
