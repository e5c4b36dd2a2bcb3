"""Conversation controller: timeline ownership and request orchestration.

The controller is the only stateful piece of the client. It holds the
ordered message timeline and the input draft, enforces a single request in
flight, and turns transport outcomes into timeline entries.

Sequencing of one submit:

1. The user message is appended before any network activity, so it stays
   visible even when the request fails.
2. The state flips to PENDING before the first await. A submit arriving
   while the transport call is suspended sees PENDING and returns.
3. History is derived from the timeline without the message just appended.
4. The outcome (answer or error) is appended as an assistant message and the
   state returns to IDLE. Failures other than TransportError are logged and
   shown with a generic message.

Listeners registered with subscribe() are called synchronously after every
transition so a UI can refresh.
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime

from ragchat.conversation.history import build_history
from ragchat.models.schemas import CitationRecord, Message, RequestState, Role
from ragchat.transport.base import Transport, TransportError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to get response. Please check your Flowise configuration."

Listener = Callable[[], None]


def format_error(message: str) -> str:
    """Timeline text for a failed request."""
    return f"Error: {message}"


class ConversationController:
    """Drives one chat session against a transport."""

    def __init__(
        self,
        transport: Transport,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize an empty conversation.

        Args:
            transport: Service adapter used to answer questions.
            clock: Source of message timestamps.
        """
        self._transport = transport
        self._clock = clock
        self._messages: list[Message] = []
        self._state = RequestState.IDLE
        self._error: str | None = None
        self._listeners: list[Listener] = []
        self._last_id = 0
        self.draft: str = ""

    # === Read-only queries ===

    @property
    def timeline(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def get_timeline(self) -> tuple[Message, ...]:
        return self.timeline

    @property
    def request_state(self) -> RequestState:
        return self._state

    def get_request_state(self) -> RequestState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return self._state is RequestState.PENDING

    @property
    def error(self) -> str | None:
        """Message of the most recent failure, cleared by the next submit."""
        return self._error

    @property
    def can_send(self) -> bool:
        return not self.is_pending and bool(self.draft.strip())

    # === Listeners ===

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # === Mutations ===

    def _next_id(self) -> str:
        # Wall-clock based but strictly increasing, even within one tick
        self._last_id = max(self._last_id + 1, time.time_ns())
        return str(self._last_id)

    def _append(
        self,
        role: Role,
        content: str,
        sources: tuple[CitationRecord, ...] | None = None,
    ) -> Message:
        message = Message(
            id=self._next_id(),
            role=role,
            content=content,
            created_at=self._clock(),
            sources=sources,
        )
        self._messages.append(message)
        return message

    async def submit(self, text: str | None = None) -> Message | None:
        """Send a question and append its outcome.

        Args:
            text: Question to send. Uses the current draft when omitted.

        Returns:
            The assistant message appended for this turn, or None when the
            call was ignored (blank input or a request already in flight).
        """
        if self.is_pending:
            logger.debug("Ignoring submit while a request is pending")
            return None

        query = (self.draft if text is None else text).strip()
        if not query:
            return None

        history = build_history(self._messages)
        self._append(Role.USER, query)
        self.draft = ""
        self._state = RequestState.PENDING
        self._error = None
        self._notify()

        logger.info(f"Submitting question ({len(history)} prior turns)")
        try:
            answer = await self._transport.send(query, history)
        except TransportError as e:
            message = str(e) or DEFAULT_ERROR_MESSAGE
            logger.warning(f"Request failed: {message}")
            self._error = message
            reply = self._append(Role.ASSISTANT, format_error(message))
        except Exception:
            logger.exception("Unexpected failure while answering")
            self._error = DEFAULT_ERROR_MESSAGE
            reply = self._append(Role.ASSISTANT, format_error(DEFAULT_ERROR_MESSAGE))
        else:
            reply = self._append(
                Role.ASSISTANT,
                answer.text,
                sources=tuple(answer.source_documents),
            )
        finally:
            self._state = RequestState.IDLE
            self._notify()

        return reply

    def clear(self) -> None:
        """Start a new conversation. Ignored while a request is pending."""
        if self.is_pending:
            return
        self._messages.clear()
        self._error = None
        self._notify()

    async def aclose(self) -> None:
        """Tear down the session and release the transport."""
        self._listeners.clear()
        await self._transport.aclose()

    async def __aenter__(self) -> "ConversationController":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
