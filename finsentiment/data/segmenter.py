"""Paragraph segmentation of extracted PDF page text.

PDF text extraction tends to lose paragraph markers but keeps the period at
the end of a sentence that closes a line. The segmenter uses that "period
followed by newline" boundary as a paragraph delimiter and gives every
resulting unit a stable address: its page number and a document-wide
paragraph number.

The split is a heuristic rather than a grammar-aware sentence splitter.
Downstream reports key results by ``(page_number, paragraph_number)``, so the
delimiter is applied literally and nothing is trimmed or merged: joining a
page's paragraphs with the delimiter gives back the page text unchanged.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..config import PARAGRAPH_DELIMITER
from ..errors import InvalidDocumentInput

logger = logging.getLogger('segmenter')


@dataclass(frozen=True)
class PageText:
    """Raw text of one PDF page as returned by the extractor."""
    page_number: int
    raw_text: str


@dataclass(frozen=True)
class Paragraph:
    """An addressed paragraph of a document.

    Attributes:
        page_number (int): 1-based page the paragraph was found on.
        paragraph_number (int): 1-based running number across the document.
        text (str): Paragraph text without the delimiter.
        page_paragraph_number (int): 1-based position within its page.
    """
    page_number: int
    paragraph_number: int
    text: str
    page_paragraph_number: int = 1


class ParagraphSegmenter:
    """Split ordered page texts into addressed paragraphs.

    Attributes:
        delimiter (str): Boundary string the page text is split on.
    """

    def __init__(self, delimiter: str = PARAGRAPH_DELIMITER):
        if not delimiter:
            raise ValueError("Paragraph delimiter must be a non-empty string")
        self.delimiter = delimiter

    def _validate(self, pages):
        if pages is None or len(pages) == 0:
            raise InvalidDocumentInput("document has no pages")

        previous = 0
        for page in pages:
            number = getattr(page, 'page_number', None)
            if not isinstance(number, int) or isinstance(number, bool) or number < 1:
                raise InvalidDocumentInput(
                    f"invalid page number {number!r}", page_number=number)
            if number <= previous:
                raise InvalidDocumentInput(
                    f"pages out of order (after page {previous})", page_number=number)
            if not isinstance(getattr(page, 'raw_text', None), str):
                raise InvalidDocumentInput("page text is not a string", page_number=number)
            previous = number

    def split_page(self, raw_text: str) -> List[str]:
        """Split one page's text on the delimiter, keeping empty parts."""
        return raw_text.split(self.delimiter)

    def segment(self, pages: Sequence[PageText]) -> List[Paragraph]:
        """Turn page texts into paragraphs numbered across the document.

        Args:
            pages (Sequence[PageText]): Pages in ascending page order.

        Returns:
            List[Paragraph]: Paragraphs in page order, then in order within
                each page. A page without the delimiter yields exactly one
                paragraph holding the whole page text.

        Raises:
            InvalidDocumentInput: If ``pages`` is empty, a page number is not
                a positive integer, pages are not strictly ascending, or a
                page's text is not a string.

        Example:
            >>> pages = [PageText(1, "Intro."), PageText(2, "First.\\nSecond.")]
            >>> [(p.page_number, p.paragraph_number) for p in ParagraphSegmenter().segment(pages)]
            [(1, 1), (2, 2), (2, 3)]
        """
        self._validate(pages)

        paragraphs = []
        counter = 0
        for page in pages:
            parts = self.split_page(page.raw_text)
            for local_number, text in enumerate(parts, start=1):
                counter += 1
                paragraphs.append(Paragraph(
                    page_number=page.page_number,
                    paragraph_number=counter,
                    text=text,
                    page_paragraph_number=local_number,
                ))
            logger.debug(f"Page {page.page_number}: {len(parts)} paragraphs")

        logger.info(f"Segmented {len(pages)} pages into {len(paragraphs)} paragraphs")
        return paragraphs

    def reconstruct(self, paragraphs: Sequence[Paragraph], page_number: int) -> str:
        """Rebuild the raw text of ``page_number`` from its paragraphs."""
        parts = [p.text for p in paragraphs if p.page_number == page_number]
        return self.delimiter.join(parts)


def segment(pages: Sequence[PageText]) -> List[Paragraph]:
    """Segment ``pages`` with the default delimiter."""
    return ParagraphSegmenter().segment(pages)
