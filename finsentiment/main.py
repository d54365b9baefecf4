"""Main entry point for financial report sentiment scoring.

This script provides the command-line interface for training the sentiment
models on a labeled corpus and scoring the paragraphs of PDF reports.

Usage:
    python -m finsentiment.main --mode train --corpus data/Sentences_AllAgree.txt
    python -m finsentiment.main --mode score --pdf report.pdf --output results/report.csv
    python -m finsentiment.main --mode pages --pdf report.pdf
    python -m finsentiment.main --mode evaluate --corpus data/Sentences_AllAgree.txt

Options:
    --mode: Operation mode (train, score, pages, evaluate)
    --corpus: Path to the labeled corpus file
    --pdf: Path to the PDF report
    --output: CSV file for scored paragraphs
    --classifier-path / --regressor-path: Where models are saved or loaded
    --retrain: Train fresh models instead of loading saved ones when scoring
"""

import argparse
import logging
import os
import sys

from .config import (CORPUS_PATH, CLASSIFIER_MODEL_PATH, REGRESSOR_MODEL_PATH,
                     RESULTS_PATH, TEST_SIZE, RANDOM_STATE)
from .errors import FinSentimentError
from .utils.utils import setup_logging

logger = logging.getLogger('finsentiment_main')


def run_train(args):
    """Fit both models on the corpus and save them."""
    from .pipeline import SentimentReportPipeline

    pipeline = SentimentReportPipeline(test_size=args.test_size, random_state=args.seed)
    classifier, regressor = pipeline.train(args.corpus)
    paths = pipeline.save_models(args.classifier_path, args.regressor_path)

    logger.info(f"Classifier validation accuracy: {classifier.metadata['validation_score']:.4f}")
    logger.info(f"Regressor validation MAE: {regressor.metadata['validation_score']:.4f}")
    return paths


def run_score(args):
    """Score the paragraphs of a PDF and write them to CSV."""
    from .data.pdf_extractor import extract_pages
    from .pipeline import SentimentReportPipeline, save_results

    if not args.pdf:
        raise SystemExit("--pdf is required in score mode")

    pipeline = SentimentReportPipeline(test_size=args.test_size, random_state=args.seed)
    pages = extract_pages(args.pdf)

    models_saved = (os.path.exists(args.classifier_path)
                    and os.path.exists(args.regressor_path))
    if args.retrain or not models_saved:
        logger.info("Training models on the corpus")
        rows = pipeline.run(pages, args.corpus)
    else:
        pipeline.load_models(args.classifier_path, args.regressor_path)
        rows = pipeline.score_pages(pages)

    return save_results(rows, args.output)


def run_pages(args):
    """Print page count and the segmented paragraphs of a PDF."""
    from .data.pdf_extractor import extract_page_count, extract_pages
    from .data.segmenter import ParagraphSegmenter

    if not args.pdf:
        raise SystemExit("--pdf is required in pages mode")

    print(f"Pages: {extract_page_count(args.pdf)}")
    for paragraph in ParagraphSegmenter().segment(extract_pages(args.pdf)):
        preview = paragraph.text.replace('\n', ' ')[:80]
        print(f"[p{paragraph.page_number} #{paragraph.paragraph_number}] {preview}")


def run_evaluate(args):
    """Report metrics of the saved models on the corpus."""
    from .data.corpus_loader import CorpusLoader
    from .models.model_trainer import evaluate_detailed, load_model

    loader = CorpusLoader()
    examples = loader.clean(loader.load(args.corpus))

    classifier = load_model(args.classifier_path)
    regressor = load_model(args.regressor_path)

    classification = evaluate_detailed(classifier, examples)
    regression = evaluate_detailed(regressor, examples)

    print(classification['classification_report'])
    print(f"Accuracy: {classification['accuracy']:.4f}")
    print(f"MAE: {regression['mae']:.4f}  RMSE: {regression['rmse']:.4f}")
    return classification, regression


MODES = {
    'train': run_train,
    'score': run_score,
    'pages': run_pages,
    'evaluate': run_evaluate,
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Financial report sentiment scoring")

    parser.add_argument("--mode", type=str, default="score", choices=sorted(MODES),
                        help="Mode to run (default: score)")
    parser.add_argument("--corpus", type=str, default=CORPUS_PATH,
                        help="Path to the labeled corpus file")
    parser.add_argument("--pdf", type=str, help="Path to the PDF report")
    parser.add_argument("--output", type=str, default=RESULTS_PATH,
                        help="CSV file for scored paragraphs")
    parser.add_argument("--classifier-path", type=str, default=CLASSIFIER_MODEL_PATH)
    parser.add_argument("--regressor-path", type=str, default=REGRESSOR_MODEL_PATH)
    parser.add_argument("--test-size", type=float, default=TEST_SIZE,
                        help="Validation share of the corpus")
    parser.add_argument("--seed", type=int, default=RANDOM_STATE, help="Random seed")
    parser.add_argument("--retrain", action="store_true",
                        help="Train new models even if saved ones exist")
    parser.add_argument("--log-file", type=str, help="Optional log file")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    setup_logging(log_file=args.log_file)

    try:
        MODES[args.mode](args)
    except (FinSentimentError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
