"""Conversation state and request orchestration.

Responsibilities:
    - Ordered, append-only message timeline
    - History derivation from answered turns
    - Single in-flight request lifecycle (idle -> pending -> idle)
    - Inline and banner error surfacing

Independent of any rendering surface; the UI subscribes to changes.
"""

from ragchat.conversation.controller import ConversationController
from ragchat.conversation.history import build_history

__all__ = ["ConversationController", "build_history"]
