"""Conversational history derived from the message timeline."""

from collections.abc import Sequence

from ragchat.models.schemas import HistoryTurn, Message, Role


def build_history(messages: Sequence[Message]) -> list[HistoryTurn]:
    """Pair answered exchanges from a timeline.

    A turn is a user message immediately followed by an assistant message.
    Pairing goes by role rather than position, so stray messages (two
    assistant replies in a row, a trailing unanswered question) are skipped
    without shifting later pairs.

    Args:
        messages: Timeline in insertion order.

    Returns:
        Answered turns, oldest first.
    """
    history: list[HistoryTurn] = []
    i = 0
    while i < len(messages) - 1:
        current, following = messages[i], messages[i + 1]
        if current.role is Role.USER and following.role is Role.ASSISTANT:
            history.append(HistoryTurn(question=current.content, answer=following.content))
            i += 2
        else:
            i += 1
    return history
