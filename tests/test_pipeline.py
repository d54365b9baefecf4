"""Integration tests for SentimentReportPipeline."""
import fitz
import pandas as pd
import pytest

from finsentiment.data.segmenter import PageText
from finsentiment.errors import EmptyTrainingSet, InvalidDocumentInput
from finsentiment.pipeline import (RESULT_COLUMNS, ScoredParagraph, SentimentReportPipeline,
                                   results_to_frame, run, save_results)


@pytest.fixture
def pages():
    return [
        PageText(1, "The company reported strong growth."),
        PageText(2, "Revenue rose.\nMargins improved."),
    ]


@pytest.fixture
def trained_pipeline(sample_examples):
    pipeline = SentimentReportPipeline()
    pipeline.train(sample_examples)
    return pipeline


class TestRun:
    """Tests for the end-to-end run."""

    def test_one_row_per_paragraph_in_order(self, pages, sample_corpus_lines):
        rows = run(pages, sample_corpus_lines)
        assert [r.key for r in rows] == [(1, 1), (2, 2), (2, 3)]
        assert [r.paragraph.text for r in rows] == [
            "The company reported strong growth.", "Revenue rose", "Margins improved."]

    def test_label_domain_and_score_type(self, pages, sample_examples):
        rows = SentimentReportPipeline().run(pages, sample_examples)
        for row in rows:
            assert isinstance(row, ScoredParagraph)
            assert row.label in (-1, 0, 1)
            assert isinstance(row.score, float)

    def test_deterministic(self, pages, sample_examples):
        first = SentimentReportPipeline().run(pages, sample_examples)
        second = SentimentReportPipeline().run(pages, sample_examples)
        assert [r.label for r in first] == [r.label for r in second]
        assert [r.score for r in first] == pytest.approx([r.score for r in second])

    def test_invalid_pages_fail_before_training(self, sample_examples):
        pipeline = SentimentReportPipeline()
        with pytest.raises(InvalidDocumentInput):
            pipeline.run([], sample_examples)
        assert pipeline.classifier is None

    def test_empty_corpus(self, pages):
        with pytest.raises(EmptyTrainingSet):
            SentimentReportPipeline().run(pages, [])

    def test_corpus_emptied_by_cleaning(self, pages):
        lines = ["Revenue + margin grew.@positive", "Costs + taxes rose.@negative"]
        with pytest.raises(EmptyTrainingSet):
            SentimentReportPipeline().run(pages, lines)

    def test_config_records_run(self, pages, sample_examples):
        pipeline = SentimentReportPipeline()
        pipeline.run(pages, sample_examples)
        assert pipeline.config["num_pages"] == 2
        assert pipeline.config["num_paragraphs"] == 3
        assert pipeline.config["clean_corpus_size"] == len(sample_examples)
        assert pipeline.config["classifier"]["validation_metric"] == 'accuracy'
        assert pipeline.config["regressor"]["validation_metric"] == 'mae'


class TestPrepareCorpus:
    """Tests for corpus inputs."""

    def test_from_path(self, tmp_path, sample_corpus_lines):
        path = tmp_path / "corpus.txt"
        path.write_bytes("".join(sample_corpus_lines).encode('latin-1'))
        examples = SentimentReportPipeline().prepare_corpus(str(path))
        assert len(examples) == len(sample_corpus_lines)

    def test_from_lines_and_examples_agree(self, sample_corpus_lines, sample_examples):
        pipeline = SentimentReportPipeline()
        from_lines = pipeline.prepare_corpus(sample_corpus_lines)
        from_examples = pipeline.prepare_corpus(sample_examples)
        assert from_lines == from_examples

    def test_cleaning_applied(self):
        examples = SentimentReportPipeline().prepare_corpus(
            ["`EPS` rose.@positive", "Revenue + margin grew.@positive"])
        assert [e.text for e in examples] == ["EPS rose."]


class TestScoring:
    """Tests for scoring with trained or loaded models."""

    def test_score_requires_models(self, pages):
        with pytest.raises(RuntimeError):
            SentimentReportPipeline().score_pages(pages)

    def test_score_pages(self, trained_pipeline, pages):
        rows = trained_pipeline.score_pages(pages)
        assert len(rows) == 3

    def test_save_and_load_models(self, trained_pipeline, pages, tmp_path):
        paths = trained_pipeline.save_models(str(tmp_path / "clf.joblib"),
                                             str(tmp_path / "reg.joblib"))
        expected = trained_pipeline.score_pages(pages)

        restored = SentimentReportPipeline()
        restored.load_models(paths["classifier"], paths["regressor"])
        rows = restored.score_pages(pages)
        assert [r.label for r in rows] == [r.label for r in expected]
        assert [r.score for r in rows] == pytest.approx([r.score for r in expected])

    def test_save_requires_models(self, tmp_path):
        with pytest.raises(RuntimeError):
            SentimentReportPipeline().save_models(str(tmp_path / "a"), str(tmp_path / "b"))


class TestResults:
    """Tests for tabulating and saving results."""

    def test_results_to_frame(self, trained_pipeline, pages):
        frame = results_to_frame(trained_pipeline.score_pages(pages))
        assert list(frame.columns) == RESULT_COLUMNS
        assert frame['paragraph_number'].tolist() == [1, 2, 3]
        assert frame['page_paragraph_number'].tolist() == [1, 1, 2]

    def test_empty_results(self):
        frame = results_to_frame([])
        assert frame.empty
        assert list(frame.columns) == RESULT_COLUMNS

    def test_save_results(self, trained_pipeline, pages, tmp_path):
        path = save_results(trained_pipeline.score_pages(pages),
                            str(tmp_path / "results" / "report.csv"))
        frame = pd.read_csv(path)
        assert len(frame) == 3
        assert set(frame['label']) <= {-1, 0, 1}


def test_run_document(tmp_path, sample_examples):
    path = tmp_path / "report.pdf"
    document = fitz.open()
    for text in ["Profit rose.\nSales grew.", "Outlook is stable."]:
        document.new_page().insert_text((72, 72), text)
    document.save(str(path))
    document.close()

    pipeline = SentimentReportPipeline()
    rows = pipeline.run_document(str(path), sample_examples)
    assert rows[0].paragraph.page_number == 1
    assert rows[-1].paragraph.page_number == 2
    assert pipeline.config["document"] == str(path)
