"""Main application entry point.

Runs the NiceGUI chat page, either mounted on the FastAPI host (default) or
standalone. Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run the chat page mounted on the FastAPI host.

    Health check and chat UI share one port.
    """
    import uvicorn
    from nicegui import ui

    from ragchat.api.app import create_app
    from ragchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="AI Assistant",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "rag-chat-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Chat UI available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_standalone() -> None:
    """Run the chat page on NiceGUI's own server (port 8080)."""
    from ragchat.ui.chat_page import main as run_page

    run_page()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=standalone to skip the FastAPI host.
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting RAG chat client in {mode} mode")

    if mode == "standalone":
        run_standalone()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
