"""Transport contract between the conversation controller and a RAG service.

Hides which remote service answers questions and how it is reached. A
transport receives a query plus the answered history and either returns a
normalized AnswerPayload or raises TransportError.
"""

from collections.abc import Sequence
from typing import Protocol

from ragchat.models.schemas import AnswerPayload, HistoryTurn


class TransportError(Exception):
    """Raised when an answer could not be obtained.

    Covers network failures, non-success statuses, and malformed bodies.
    The message is meant to be shown to the user as-is.
    """

    pass


class EmptyQueryError(ValueError):
    """Raised when a transport is asked to send a blank query."""

    pass


class Transport(Protocol):
    """Anything able to answer a query given prior turns."""

    async def send(self, query: str, history: Sequence[HistoryTurn]) -> AnswerPayload:
        """Answer a query.

        Args:
            query: The user's question, non-empty after trimming.
            history: Answered turns in timeline order, possibly empty.

        Returns:
            The normalized answer.

        Raises:
            EmptyQueryError: If the query is blank.
            TransportError: If no answer could be obtained.
        """
        ...

    async def aclose(self) -> None:
        """Release any open connections."""
        ...


def require_query(query: str) -> str:
    """Return the trimmed query, rejecting blank input."""
    query = query.strip()
    if not query:
        raise EmptyQueryError("Query must not be empty")
    return query
