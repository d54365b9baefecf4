"""
Data handling module for financial report sentiment analysis.
Handles PDF page extraction, paragraph segmentation, corpus loading
and text normalization.
"""

from .text_processor import TextNormalizer
from .segmenter import PageText, Paragraph, ParagraphSegmenter
from .corpus_loader import CorpusLoader, LabeledExample

__all__ = [
    'TextNormalizer',
    'PageText',
    'Paragraph',
    'ParagraphSegmenter',
    'CorpusLoader',
    'LabeledExample'
]
