"""PDF parsing module using pypdf.

Extracts normalized text and metadata from PDF files and validates uploads
before any of their content reaches a language model.
"""

import io
import logging
import re

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from pdf_chat.models.schemas import Document, PDFInfo

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINES = re.compile(r"\n\s*\n")


class PDFChatError(Exception):
    """Base class for errors raised by the PDF chat pipeline."""


class ExtractionError(PDFChatError):
    """Raised when a PDF cannot be read or one of its pages cannot be parsed."""


class DocumentValidationError(PDFChatError):
    """Raised when an upload is rejected before any model call is made.

    Attributes:
        status_code: HTTP status the API layer should answer with.
    """

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


def validate_pdf_bytes(file_content: bytes, max_size: int = MAX_FILE_SIZE) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted upload in bytes.

    Raises:
        DocumentValidationError: If the file is empty, too large or not a PDF.
    """
    if not file_content:
        raise DocumentValidationError("Empty file provided")

    if len(file_content) > max_size:
        size_mb = len(file_content) / (1024 * 1024)
        limit_mb = max_size / (1024 * 1024)
        raise DocumentValidationError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)",
            status_code=413,
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise DocumentValidationError("Invalid PDF: file does not start with PDF header")


def validate_filename(filename: str | None) -> str:
    """Check that an upload carries a name ending in ``.pdf``."""
    if not filename:
        raise DocumentValidationError("Filename is required")
    if not filename.lower().endswith(".pdf"):
        raise DocumentValidationError("Only PDF files are accepted")
    return filename


def normalize_text(text: str) -> str:
    """Collapse whitespace runs and blank-line sequences, then trim."""
    text = _WHITESPACE_RUN.sub(" ", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


def _open_reader(file_content: bytes) -> PdfReader:
    try:
        return PdfReader(io.BytesIO(file_content))
    except PdfReadError as e:
        raise ExtractionError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise ExtractionError(f"Failed to read PDF: {e}") from e


def extract_text(file_content: bytes) -> str:
    """Extract the text of every page as one normalized string.

    Each page's text is preceded by a ``--- Page <n> ---`` marker. A document
    where no page yields any text (scanned or image-only) returns ``""``.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        Normalized document text.

    Raises:
        ExtractionError: If the PDF cannot be opened or any page fails to parse.
    """
    return _read_text(_open_reader(file_content))


def _read_text(reader: PdfReader) -> str:
    parts: list[str] = []
    has_text = False
    try:
        for number, page in enumerate(reader.pages, start=1):
            try:
                runs = (page.extract_text() or "").split()
            except Exception as e:
                raise ExtractionError(f"Failed to extract text from page {number}: {e}") from e
            has_text = has_text or bool(runs)
            parts.append(f"\n\n--- Page {number} ---\n{' '.join(runs)}")
    except PdfReadError as e:
        raise ExtractionError(f"Corrupt or invalid PDF: {e}") from e

    if not has_text:
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")
        return ""

    return normalize_text("".join(parts))


def _extract_metadata(reader: PdfReader) -> dict[str, str | None]:
    """Extract metadata from PDF reader.

    Args:
        reader: Initialized PdfReader instance.

    Returns:
        Dictionary of metadata fields.
    """
    metadata: dict[str, str | None] = {}

    try:
        if reader.metadata:
            metadata["title"] = reader.metadata.get("/Title")
            metadata["author"] = reader.metadata.get("/Author")
            metadata["subject"] = reader.metadata.get("/Subject")
            metadata["creator"] = reader.metadata.get("/Creator")

            creation_date = reader.metadata.get("/CreationDate")
            if creation_date:
                metadata["creation_date"] = str(creation_date)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return {k: str(v) for k, v in metadata.items() if v}


def get_pdf_info(file_content: bytes, display_name: str) -> PDFInfo:
    """Read page count and descriptive metadata.

    Missing titles fall back to ``display_name`` and missing authors to
    ``"Unknown"``.

    Raises:
        ExtractionError: If the PDF cannot be opened.
    """
    return _read_info(_open_reader(file_content), display_name)


def _read_info(reader: PdfReader, display_name: str) -> PDFInfo:
    try:
        pages = len(reader.pages)
    except PdfReadError as e:
        raise ExtractionError(f"Corrupt or invalid PDF: {e}") from e

    metadata = _extract_metadata(reader)
    return PDFInfo(
        pages=pages,
        title=metadata.get("title") or display_name,
        author=metadata.get("author") or "Unknown",
        subject=metadata.get("subject", ""),
        creator=metadata.get("creator", ""),
        creation_date=metadata.get("creation_date"),
    )


def load_document(
    file_content: bytes,
    filename: str | None,
    max_size: int = MAX_FILE_SIZE,
) -> Document:
    """Validate an upload and turn it into a :class:`Document`.

    Args:
        file_content: Raw bytes of the uploaded file.
        filename: Name the user uploaded the file under.
        max_size: Largest accepted upload in bytes.

    Returns:
        Immutable document with its extracted text.

    Raises:
        DocumentValidationError: Wrong type, empty, oversize, or no text.
        ExtractionError: The PDF could not be parsed.
    """
    display_name = validate_filename(filename)
    validate_pdf_bytes(file_content, max_size=max_size)

    reader = _open_reader(file_content)
    text = _read_text(reader)
    if not text.strip():
        raise DocumentValidationError(
            "Could not extract text from this PDF. "
            "The file might be image-based or corrupted."
        )

    info = _read_info(reader, display_name)
    logger.info(f"Extracted {len(text)} characters from {display_name} ({info.pages} pages)")

    return Document(
        raw_bytes=file_content,
        extracted_text=text,
        display_name=display_name,
        info=info,
    )
