"""Schemas for timeline messages, citations, and normalized answers."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a timeline message."""

    USER = "user"
    ASSISTANT = "assistant"


class RequestState(str, Enum):
    """Lifecycle of the single outstanding request.

    A failed request settles back to IDLE; the failure itself is kept as the
    controller's current error.
    """

    IDLE = "idle"
    PENDING = "pending"


class CitationRecord(BaseModel):
    """A passage retrieved by the RAG service to ground an answer.

    Attributes:
        excerpt: The retrieved passage text.
        metadata: Source metadata (file name, page, etc.), opaque to the client.
    """

    model_config = ConfigDict(frozen=True)

    excerpt: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class Message(BaseModel):
    """A single entry in the conversation timeline.

    Attributes:
        id: Unique identifier, increasing in creation order.
        role: Who produced the message.
        content: The message text.
        created_at: When the message was appended.
        sources: Citations backing an assistant answer, if any.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    content: str
    created_at: datetime = Field(default_factory=datetime.now)
    sources: tuple[CitationRecord, ...] | None = None

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER


class HistoryTurn(BaseModel):
    """One answered exchange passed to the service as conversational context."""

    question: str
    answer: str


class AnswerPayload(BaseModel):
    """Normalized answer returned by a transport.

    Attributes:
        text: The generated answer.
        source_documents: Retrieved citations, in service order.
    """

    text: str
    source_documents: list[CitationRecord] = Field(default_factory=list)
