"""PDF upload endpoint for document ingestion.

Handles file upload, validation, text extraction and the opening analysis
turn of the new conversation.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, UploadFile, status

from pdf_chat.api.sessions import get_session_store
from pdf_chat.models.schemas import PDFUploadResponse
from pdf_chat.parsing.pdf_parser import (
    DocumentValidationError,
    ExtractionError,
    load_document,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/pdf", response_model=PDFUploadResponse)
async def upload_pdf(
    file: UploadFile,
    api_key: Annotated[str | None, Form()] = None,
) -> PDFUploadResponse:
    """Upload a PDF and start a conversation about it.

    Validates the file, extracts its text, creates a session and runs the
    automatic analysis turn before returning.

    Args:
        file: The uploaded PDF file (multipart/form-data).
        api_key: Optional provider key. The configured default is used
            when omitted; with neither, the assistant runs in demo mode.

    Returns:
        PDFUploadResponse with the session id and the analysis message.

    Raises:
        400: Invalid file (not PDF, empty, corrupt, no extractable text).
        413: File exceeds the size limit.
    """
    store = get_session_store()
    content = await file.read()

    try:
        document = await asyncio.to_thread(
            load_document, content, file.filename, max_size=store.config.max_file_size
        )
    except DocumentValidationError as e:
        logger.warning(f"Rejected upload {file.filename}: {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except ExtractionError as e:
        logger.warning(f"PDF parse error for {file.filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    session_id, state = store.create(document, api_key)
    await state.load_document()
    logger.info(f"Successfully ingested PDF: {document.display_name} ({document.info.pages} pages)")

    return PDFUploadResponse(
        session_id=session_id,
        filename=document.display_name,
        pages=document.info.pages,
        characters=len(document.extracted_text),
        info=document.info,
        messages=state.messages,
    )
