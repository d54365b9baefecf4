"""End-to-end sentiment scoring of financial reports.

This module wires the components together: PDF pages are segmented into
paragraphs, the labeled corpus is loaded and cleaned, a classification and a
regression model are fitted on it, and both are applied to every paragraph.

The main class, SentimentReportPipeline, keeps the fitted models and the
run configuration so results can be reproduced and the models persisted.

Example:
    >>> pipeline = SentimentReportPipeline()
    >>> rows = pipeline.run_document('reports/annual_report.pdf',
    ...                              'data/Sentences_AllAgree.txt')
    >>> results_to_frame(rows).head()
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from .config import (TEST_SIZE, RANDOM_STATE, CLASSIFIER_MODEL_PATH,
                     REGRESSOR_MODEL_PATH)
from .data.corpus_loader import CorpusLoader, LabeledExample
from .data.segmenter import PageText, Paragraph, ParagraphSegmenter
from .data.text_processor import TextNormalizer
from .models.model_trainer import (CLASSIFICATION, REGRESSION, SentimentModel,
                                   SentimentPipeline, load_model, save_model)

logger = logging.getLogger('report_pipeline')

RESULT_COLUMNS = ['page_number', 'paragraph_number', 'page_paragraph_number',
                  'text', 'label', 'score']


@dataclass(frozen=True)
class ScoredParagraph:
    """A paragraph with its predicted label and regression score."""
    paragraph: Paragraph
    label: int
    score: float

    @property
    def key(self) -> Tuple[int, int]:
        return (self.paragraph.page_number, self.paragraph.paragraph_number)


class SentimentReportPipeline:
    """Score the paragraphs of a report with corpus-trained sentiment models.

    Attributes:
        segmenter (ParagraphSegmenter): Splits pages into paragraphs.
        loader (CorpusLoader): Loads and cleans the labeled corpus.
        normalizer (TextNormalizer): Shared by both fitted models.
        test_size (float): Validation share used when fitting.
        random_state (int): Seed used when fitting.
        classifier (SentimentModel): Fitted classification model, if any.
        regressor (SentimentModel): Fitted regression model, if any.
        config (dict): Run configuration and statistics for reproducibility.
    """

    def __init__(self, segmenter: ParagraphSegmenter = None, loader: CorpusLoader = None,
                 normalizer: TextNormalizer = None, test_size: float = TEST_SIZE,
                 random_state: int = RANDOM_STATE, classifier: SentimentModel = None,
                 regressor: SentimentModel = None):
        self.segmenter = segmenter or ParagraphSegmenter()
        self.loader = loader or CorpusLoader()
        self.normalizer = normalizer or TextNormalizer()
        self.test_size = test_size
        self.random_state = random_state
        self.classifier = classifier
        self.regressor = regressor
        self.config = {
            "test_size": test_size,
            "random_state": random_state,
            "run_date": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        }

    def prepare_corpus(self, corpus) -> List[LabeledExample]:
        """Load (when needed) and clean the labeled corpus.

        Args:
            corpus: A corpus file path, an iterable of ``text@label`` lines,
                or already loaded LabeledExample objects.

        Returns:
            List[LabeledExample]: Cleaned examples.
        """
        if isinstance(corpus, (str, os.PathLike)):
            examples = self.loader.load(corpus)
        else:
            items = list(corpus)
            if all(isinstance(item, LabeledExample) for item in items):
                examples = items
            else:
                examples = self.loader.load(items)

        cleaned = self.loader.clean(examples)
        self.loader.label_distribution(cleaned)
        self.config["corpus_size"] = len(examples)
        self.config["clean_corpus_size"] = len(cleaned)
        logger.info(f"Corpus ready: {len(cleaned)} of {len(examples)} examples kept")
        return cleaned

    def train(self, corpus) -> Tuple[SentimentModel, SentimentModel]:
        """Fit the classification and regression models on the corpus.

        Each model gets its own vocabulary from its own fit call.

        Returns:
            tuple: (classifier, regressor)
        """
        examples = self.prepare_corpus(corpus)

        self.classifier = SentimentPipeline(
            mode=CLASSIFICATION, test_size=self.test_size,
            random_state=self.random_state, normalizer=self.normalizer).fit(examples)
        self.regressor = SentimentPipeline(
            mode=REGRESSION, test_size=self.test_size,
            random_state=self.random_state, normalizer=self.normalizer).fit(examples)

        self.config["classifier"] = dict(self.classifier.metadata)
        self.config["regressor"] = dict(self.regressor.metadata)
        return self.classifier, self.regressor

    def score(self, paragraphs: Sequence[Paragraph]) -> List[ScoredParagraph]:
        """Predict label and score for every paragraph, in input order.

        Raises:
            RuntimeError: If the models have not been trained or loaded.
        """
        if self.classifier is None or self.regressor is None:
            raise RuntimeError("Models are not available; call train() or load_models() first")

        paragraphs = list(paragraphs)
        texts = [p.text for p in paragraphs]
        labels = self.classifier.predict(texts)
        scores = self.regressor.predict(texts)

        rows = [
            ScoredParagraph(paragraph=p, label=int(label), score=float(score))
            for p, label, score in zip(paragraphs, labels, scores)
        ]
        logger.info(f"Scored {len(rows)} paragraphs")
        return rows

    def score_pages(self, document_pages: Sequence[PageText]) -> List[ScoredParagraph]:
        """Segment pages and score the resulting paragraphs with the current models."""
        paragraphs = self.segmenter.segment(document_pages)
        self.config["num_pages"] = len(document_pages)
        self.config["num_paragraphs"] = len(paragraphs)
        return self.score(paragraphs)

    def run(self, document_pages: Sequence[PageText], corpus_examples) -> List[ScoredParagraph]:
        """Segment a document, train both models on the corpus and score it.

        Args:
            document_pages (Sequence[PageText]): Extracted pages of the report.
            corpus_examples: Corpus path, lines, or LabeledExample objects.

        Returns:
            List[ScoredParagraph]: One row per paragraph, in paragraph order.
        """
        paragraphs = self.segmenter.segment(document_pages)
        self.config["num_pages"] = len(document_pages)
        self.config["num_paragraphs"] = len(paragraphs)

        self.train(corpus_examples)
        return self.score(paragraphs)

    def run_document(self, pdf_path: str, corpus_examples) -> List[ScoredParagraph]:
        """Extract pages from a PDF and run the full pipeline on them."""
        from .data.pdf_extractor import extract_pages

        self.config["document"] = pdf_path
        return self.run(extract_pages(pdf_path), corpus_examples)

    def save_models(self, classifier_path: str = CLASSIFIER_MODEL_PATH,
                    regressor_path: str = REGRESSOR_MODEL_PATH) -> dict:
        """Persist both fitted models and return their paths."""
        if self.classifier is None or self.regressor is None:
            raise RuntimeError("Nothing to save; train the models first")
        save_model(self.classifier, classifier_path)
        save_model(self.regressor, regressor_path)
        return {"classifier": classifier_path, "regressor": regressor_path}

    def load_models(self, classifier_path: str = CLASSIFIER_MODEL_PATH,
                    regressor_path: str = REGRESSOR_MODEL_PATH) -> Tuple[SentimentModel, SentimentModel]:
        """Load both models previously written by :meth:`save_models`."""
        self.classifier = load_model(classifier_path)
        self.regressor = load_model(regressor_path)
        return self.classifier, self.regressor


def run(document_pages: Sequence[PageText], corpus_examples) -> List[ScoredParagraph]:
    """Score ``document_pages`` with models trained on ``corpus_examples``."""
    return SentimentReportPipeline().run(document_pages, corpus_examples)


def results_to_frame(rows: Iterable[ScoredParagraph]) -> pd.DataFrame:
    """Tabulate scored paragraphs, one row per paragraph.

    Returns:
        pd.DataFrame: Columns page_number, paragraph_number,
            page_paragraph_number, text, label and score.
    """
    records = [
        (r.paragraph.page_number, r.paragraph.paragraph_number,
         r.paragraph.page_paragraph_number, r.paragraph.text, r.label, r.score)
        for r in rows
    ]
    return pd.DataFrame(records, columns=RESULT_COLUMNS)


def save_results(rows: Iterable[ScoredParagraph], path: str) -> str:
    """Write scored paragraphs to a CSV file and return its path."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    results_to_frame(rows).to_csv(path, index=False)
    logger.info(f"Results saved to {path}")
    return path
