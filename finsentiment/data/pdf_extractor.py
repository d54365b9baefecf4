"""PDF text extraction for financial reports.

Thin wrapper around PyMuPDF that produces the per-page raw text consumed by
the paragraph segmenter, plus page rendering for human inspection. No layout
analysis is performed: each page is read as flat text.
"""

import logging
import os
from typing import List

import fitz  # PyMuPDF

from ..config import PAGE_IMAGE_ZOOM
from ..errors import InvalidDocumentInput
from .segmenter import PageText

logger = logging.getLogger('pdf_extractor')


def _open(path):
    if not os.path.exists(path):
        raise InvalidDocumentInput(f"PDF file not found: {path}")
    try:
        return fitz.open(path)
    except RuntimeError as e:
        logger.error(f"Failed to open PDF {path}: {str(e)}")
        raise InvalidDocumentInput(f"unreadable PDF {path}: {e}") from e


def extract_pages(path: str) -> List[PageText]:
    """Extract the raw text of every page of a PDF.

    Args:
        path (str): Path to the PDF file.

    Returns:
        List[PageText]: One entry per page, numbered from 1.

    Raises:
        InvalidDocumentInput: If the file is missing or cannot be parsed.
    """
    pdf_document = _open(path)
    try:
        pages = [
            PageText(page_number=index + 1, raw_text=page.get_text())
            for index, page in enumerate(pdf_document)
        ]
    finally:
        pdf_document.close()

    logger.info(f"Extracted {len(pages)} pages from {os.path.basename(path)}")
    return pages


def extract_page_count(path: str) -> int:
    """Return the number of pages of a PDF."""
    pdf_document = _open(path)
    try:
        return pdf_document.page_count
    finally:
        pdf_document.close()


def render_page_image(path: str, page_number: int, zoom: float = PAGE_IMAGE_ZOOM) -> bytes:
    """Render one page as PNG bytes for visual inspection.

    Args:
        path (str): Path to the PDF file.
        page_number (int): 1-based page number.
        zoom (float, optional): Scale factor applied to the page. Defaults to
            PAGE_IMAGE_ZOOM from config.

    Returns:
        bytes: PNG-encoded page image.

    Raises:
        InvalidDocumentInput: If the file cannot be opened or the page does
            not exist.
    """
    pdf_document = _open(path)
    try:
        if not 1 <= page_number <= pdf_document.page_count:
            raise InvalidDocumentInput(
                f"page out of range (document has {pdf_document.page_count} pages)",
                page_number=page_number)
        page = pdf_document[page_number - 1]
        pixmap = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom))
        return pixmap.tobytes('png')
    finally:
        pdf_document.close()
