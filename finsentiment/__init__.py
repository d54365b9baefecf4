"""
Financial Report Sentiment - Main Package
Segments financial PDF reports into paragraphs and scores them with
sentiment models trained on a labeled financial-phrase corpus.
"""

# Import core modules
from . import data
from . import nlp
from . import models
from . import utils

# Import key objects for convenience
from .config import ROOT_DIR, DATA_DIR, MODEL_DIR, OUTPUT_DIR
from .errors import (FinSentimentError, MalformedCorpusRow, InvalidDocumentInput,
                     ModelFitError, EmptyTrainingSet, VocabularyMismatch)
from .models.model_trainer import fit, predict, evaluate
from .pipeline import SentimentReportPipeline, ScoredParagraph, run

__version__ = "0.1.0"

__all__ = [
    'data',
    'nlp',
    'models',
    'utils',
    'fit',
    'predict',
    'evaluate',
    'run',
    'SentimentReportPipeline',
    'ScoredParagraph',
    'FinSentimentError',
    'MalformedCorpusRow',
    'InvalidDocumentInput',
    'ModelFitError',
    'EmptyTrainingSet',
    'VocabularyMismatch',
    'ROOT_DIR',
    'DATA_DIR',
    'MODEL_DIR',
    'OUTPUT_DIR'
]
