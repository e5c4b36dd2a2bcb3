"""FastAPI host application.

Serves the health endpoint; the NiceGUI chat page is mounted onto this app
by the entry point.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ragchat import __version__

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and shutdown of the host application.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting RAG chat client...")
    yield
    logger.info("Shutting down RAG chat client...")


def create_app() -> FastAPI:
    """Create and configure the host application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="RAG Chat Client",
        description=(
            "Conversational front end for a remote retrieval-augmented "
            "answering service."
        ),
        version=__version__,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "rag-chat-client"}

    return application
