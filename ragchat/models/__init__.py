"""Pydantic models shared by the transport, controller, and UI.

Provides type safety and validation for everything that crosses a seam.

Models:
    - Message: Immutable timeline entry
    - CitationRecord: Retrieved passage backing an answer
    - HistoryTurn: Answered exchange sent as context
    - AnswerPayload: Normalized service answer
    - RequestState: Idle/pending lifecycle of the outstanding request
"""

from ragchat.models.schemas import (
    AnswerPayload,
    CitationRecord,
    HistoryTurn,
    Message,
    RequestState,
    Role,
)

__all__ = [
    "AnswerPayload",
    "CitationRecord",
    "HistoryTurn",
    "Message",
    "RequestState",
    "Role",
]
