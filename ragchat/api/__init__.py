"""Host application for the chat client.

Endpoints:
    - GET /health: Service health status
    - GET /: Chat page (mounted by NiceGUI)
"""

from ragchat.api.app import create_app

__all__ = ["create_app"]
