"""NiceGUI interface - thin visualization layer over the conversation state.

Responsibilities:
    - PDF upload with user-facing validation messages
    - API key entry
    - Chat log rendered as markdown with timestamps
    - Input disabled while the assistant is working

Contains no prompt or provider logic.
"""
