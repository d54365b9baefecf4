"""Unit tests for ParagraphSegmenter."""
import pytest

from finsentiment.data.segmenter import PageText, Paragraph, ParagraphSegmenter, segment
from finsentiment.errors import InvalidDocumentInput


@pytest.fixture
def segmenter():
    """Create ParagraphSegmenter instance."""
    return ParagraphSegmenter()


@pytest.fixture
def report_pages():
    """Pages shaped like PDF extraction output."""
    return [
        PageText(1, "Annual Report 2023\nLetter from the CEO.\nWe grew revenue by 12%.\nOutlook"),
        PageText(2, "Risks increased.\nMargins were under pressure.\n"),
        PageText(3, "No paragraph delimiter on this page"),
    ]


class TestSegment:
    """Tests for paragraph addressing."""

    def test_two_page_document(self, segmenter):
        pages = [
            PageText(1, "The company reported strong growth."),
            PageText(2, "Revenue rose.\nMargins improved."),
        ]
        paragraphs = segmenter.segment(pages)

        assert [p.paragraph_number for p in paragraphs] == [1, 2, 3]
        assert [p.page_number for p in paragraphs] == [1, 2, 2]
        assert paragraphs[1].text == "Revenue rose"
        assert paragraphs[2].text == "Margins improved."

    def test_page_without_delimiter_is_one_paragraph(self, segmenter):
        paragraphs = segmenter.segment([PageText(1, "Net sales\nEUR 10 mn")])
        assert paragraphs == [Paragraph(1, 1, "Net sales\nEUR 10 mn", 1)]

    def test_global_numbering_is_strictly_increasing(self, segmenter, report_pages):
        numbers = [p.paragraph_number for p in segmenter.segment(report_pages)]
        assert numbers == list(range(1, len(numbers) + 1))

    def test_page_local_numbering_restarts(self, segmenter, report_pages):
        paragraphs = segmenter.segment(report_pages)
        page2 = [p.page_paragraph_number for p in paragraphs if p.page_number == 2]
        assert page2 == [1, 2, 3]

    def test_trailing_empty_part_is_retained(self, segmenter, report_pages):
        paragraphs = segmenter.segment(report_pages)
        page2 = [p.text for p in paragraphs if p.page_number == 2]
        assert page2 == ["Risks increased", "Margins were under pressure", ""]

    def test_empty_page_text_yields_one_empty_paragraph(self, segmenter):
        paragraphs = segmenter.segment([PageText(1, "")])
        assert len(paragraphs) == 1
        assert paragraphs[0].text == ""

    def test_reconstruction(self, segmenter, report_pages):
        paragraphs = segmenter.segment(report_pages)
        for page in report_pages:
            assert segmenter.reconstruct(paragraphs, page.page_number) == page.raw_text

    def test_custom_delimiter(self):
        paragraphs = ParagraphSegmenter(delimiter="\n\n").segment([PageText(1, "a\n\nb")])
        assert [p.text for p in paragraphs] == ["a", "b"]

    def test_module_level_segment(self):
        assert len(segment([PageText(1, "One.\nTwo.")])) == 2


class TestInvalidInput:
    """Tests for rejected page sequences."""

    def test_empty_document(self, segmenter):
        with pytest.raises(InvalidDocumentInput):
            segmenter.segment([])

    def test_none_document(self, segmenter):
        with pytest.raises(InvalidDocumentInput):
            segmenter.segment(None)

    def test_non_string_page_text(self, segmenter):
        with pytest.raises(InvalidDocumentInput) as exc_info:
            segmenter.segment([PageText(1, "ok"), PageText(2, None)])
        assert exc_info.value.page_number == 2
        assert "page 2" in str(exc_info.value)

    @pytest.mark.parametrize("number", [0, -1, "1", 1.0])
    def test_invalid_page_number(self, segmenter, number):
        with pytest.raises(InvalidDocumentInput):
            segmenter.segment([PageText(number, "text")])

    def test_pages_out_of_order(self, segmenter):
        with pytest.raises(InvalidDocumentInput) as exc_info:
            segmenter.segment([PageText(2, "b"), PageText(1, "a")])
        assert exc_info.value.page_number == 1

    def test_empty_delimiter_rejected(self):
        with pytest.raises(ValueError):
            ParagraphSegmenter(delimiter="")
