import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Speaker of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """A single turn as sent to a language model.

    Attributes:
        role: The speaker (user, assistant, or system).
        content: The message text.
    """

    role: Role
    content: str


class Message(BaseModel):
    """A message in the rendered conversation log.

    Attributes:
        id: Unique identifier.
        role: Either user or assistant.
        content: Markdown text.
        created_at: Creation timestamp.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    content: str
    created_at: datetime = Field(default_factory=datetime.now)

    def to_chat_message(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)


class PDFInfo(BaseModel):
    """Descriptive information about an uploaded PDF."""

    pages: int = Field(ge=0)
    title: str
    author: str = "Unknown"
    subject: str = ""
    creator: str = ""
    creation_date: str | None = None


class Document(BaseModel):
    """An uploaded PDF and its extracted text. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    raw_bytes: bytes = Field(repr=False)
    extracted_text: str
    display_name: str
    info: PDFInfo


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        session_id: Session returned by the upload endpoint.
        message: User's question.
        api_key: Optional provider key replacing the session's current one.
    """

    session_id: str
    message: str = Field(..., min_length=1)
    api_key: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Assistant reply together with the updated conversation log."""

    session_id: str
    response: str
    messages: list[Message]


class SessionInfo(BaseModel):
    """Current state of a chat session."""

    session_id: str
    filename: str
    messages: list[Message]
    is_busy: bool


class PDFUploadResponse(BaseModel):
    """Response after PDF upload processing.

    Attributes:
        session_id: Session created for the uploaded document.
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        characters: Length of the extracted text.
        info: Document metadata.
        messages: Conversation log, starting with the analysis summary.
    """

    session_id: str
    filename: str
    pages: int
    characters: int
    info: PDFInfo
    messages: list[Message]
