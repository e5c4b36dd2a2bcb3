"""RAG Chat Client - conversational front end for a remote RAG answering service.

Combines httpx for the remote Flowise prediction API, Pydantic for data
validation, NiceGUI for visualization, and FastAPI as the hosting server.

Components:
    - config: Environment-driven client settings
    - models: Message, citation, and payload schemas
    - transport: Remote answering service adapter
    - conversation: Timeline ownership and request orchestration
    - ui: Web interface for chat interactions
    - api: Host application and health endpoint
"""

__version__ = "0.1.0"
