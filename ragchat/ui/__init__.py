"""NiceGUI interface - thin visualization layer over the conversation controller.

Responsibilities:
    - Timeline display with citations and timestamps
    - Typing indicator while a request is pending
    - Error banner and notifications
    - New chat and input focus handling

Contains no request logic. Rendering policy lives in rendering.py so it can
be tested without a browser.
"""
