"""Unit tests for individual components in isolation.

Coverage:
    - config: Settings validation and environment loading
    - models/conversation: History pairing and controller state machine
    - transport: Flowise request building and response normalization
    - ui: Rendering policy (citation truncation, previews, markdown)

Uses an in-memory fake transport instead of network calls.
"""
