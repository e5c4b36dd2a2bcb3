"""Ties a conversation controller to the lifetime of a NiceGUI client."""

from typing import Any

from ragchat.conversation.controller import ConversationController


def bind_to_client(client: Any, controller: ConversationController) -> None:
    """Release the controller when NiceGUI deletes the client.

    Disconnect handlers also fire on transient socket drops followed by a
    reconnect, so teardown waits for deletion after the reconnect timeout.
    """
    client.on_delete(controller.aclose)
