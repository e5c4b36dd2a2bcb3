"""Test package for the RAG chat client.

Structure:
    - unit/: Individual function and class tests
    - integration/: Controller, transport, and host app working together

HTTP is faked at the httpx transport layer, so no Flowise server is needed.
Leverages pytest with pytest-check for soft assertions.
"""
