"""Integration tests for components working together as a system.

Coverage:
    - Controller driving the real Flowise transport over a mocked HTTP layer
    - Host application endpoints via ASGI transport
"""
