"""Adapters to the remote RAG answering service.

Responsibilities:
    - Translate a query and answered history into a remote call
    - Normalize the service's response into an AnswerPayload
    - Fold network, status, and body failures into TransportError

Keeps the controller unaware of the service's wire format.
"""

from ragchat.transport.base import EmptyQueryError, Transport, TransportError
from ragchat.transport.flowise import FlowiseTransport, normalize_answer

__all__ = [
    "EmptyQueryError",
    "FlowiseTransport",
    "Transport",
    "TransportError",
    "normalize_answer",
]
