"""Pydantic models for the conversation pipeline and the HTTP API.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Document: Uploaded PDF with its extracted text
    - Message: Entry in the rendered conversation log
    - ChatMessage: Turn sent to a language model
    - ChatRequest / ChatResponse: Chat endpoint payloads
    - PDFUploadResponse: Upload endpoint payload
    - SessionInfo: Chat session details
"""

from pdf_chat.models.schemas import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    Document,
    Message,
    PDFInfo,
    PDFUploadResponse,
    Role,
    SessionInfo,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "Document",
    "Message",
    "PDFInfo",
    "PDFUploadResponse",
    "Role",
    "SessionInfo",
]
