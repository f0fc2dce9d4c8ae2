"""
Document text extraction using PyMuPDF.
Turns an uploaded PDF (bytes or a file on disk) into cleaned plain text.
"""
import logging
import re
import unicodedata
from pathlib import Path
from typing import Union

import fitz  # PyMuPDF

from ..errors import ExtractionError
from ..results import Err, Ok, Result

logger = logging.getLogger(__name__)

DocumentSource = Union[bytes, Path]


def clean_text(text: str, max_chars: int = 50000) -> str:
    """Normalize unicode (NFC), collapse runs of whitespace and truncate."""
    if not text or not text.strip():
        return ""
    t = unicodedata.normalize("NFC", text)
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    t = t.strip()
    if max_chars and len(t) > max_chars:
        t = t[:max_chars]
    return t


def _open_document(source: DocumentSource) -> fitz.Document:
    if isinstance(source, Path):
        return fitz.open(str(source), filetype="pdf")
    return fitz.open(stream=source, filetype="pdf")


def extract_text(source: DocumentSource, max_chars: int = 50000) -> Result[str]:
    """
    Extract text from every page of a PDF, in page order.

    Args:
        source: Raw PDF bytes or path to a PDF on disk
        max_chars: Upper bound on returned characters

    Returns:
        Ok(text), or Err(ExtractionError) when the payload is not a readable
        PDF or holds no text (e.g. a scanned image-only document)
    """
    if isinstance(source, bytes) and not source:
        return Err(ExtractionError("Document is empty"))

    try:
        document = _open_document(source)
    except Exception as e:  # PyMuPDF raises several unrelated types for bad input
        logger.warning("Could not open document: %s", e)
        return Err(ExtractionError(f"Failed to extract text from PDF: {e}"))

    try:
        if document.needs_pass:
            return Err(ExtractionError("PDF is password protected"))
        if document.page_count == 0:
            return Err(ExtractionError("PDF has no pages"))

        pages = []
        for page in document:
            page_text = page.get_text("text")
            if page_text:
                pages.append(page_text)
    except Exception as e:
        logger.warning("Failed while reading PDF pages: %s", e)
        return Err(ExtractionError(f"Failed to extract text from PDF: {e}"))
    finally:
        document.close()

    text = clean_text("\n\n".join(pages), max_chars=max_chars)
    if not text:
        return Err(ExtractionError("Could not extract text from PDF"))

    logger.debug("Extracted %d chars from %d page(s)", len(text), len(pages))
    return Ok(text)
