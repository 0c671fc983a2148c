"""PDF parsing utilities for document processing.

Turns uploaded PDF bytes into a validated document whose text is ready to be
embedded into prompts.

Responsibilities:
    - Upload validation (file type, size, PDF header)
    - Page-by-page text extraction with pypdf
    - Whitespace normalization
    - Metadata extraction (title, author, pages)
"""

from pdf_chat.parsing.pdf_parser import (
    DocumentValidationError,
    ExtractionError,
    PDFChatError,
    extract_text,
    get_pdf_info,
    load_document,
)

__all__ = [
    "DocumentValidationError",
    "ExtractionError",
    "PDFChatError",
    "extract_text",
    "get_pdf_info",
    "load_document",
]
