"""
Core NLP module for financial sentiment analysis.
Contains the vocabulary and count vectorizer shared by training and inference.
"""

from .nlp_processing import FeatureVectorizer, Vocabulary

__all__ = [
    'FeatureVectorizer',
    'Vocabulary'
]
