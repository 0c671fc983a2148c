"""FastAPI endpoints for the PDF chat assistant.

Endpoints:
    - GET /health: Service health status
    - POST /upload/pdf: Upload a PDF and start a conversation
    - POST /chat: Ask a question about the uploaded document
    - GET /sessions/{id}: Conversation log
    - POST /sessions/{id}/clear: Reset the conversation
"""

from pdf_chat.api.app import app, create_app

__all__ = ["app", "create_app"]
