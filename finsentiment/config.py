# config.py
"""
Configuration file for the financial report sentiment project.
Contains paths, parameters and constants used throughout the project.
"""

import os

# Directory paths
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(ROOT_DIR, 'data')
MODEL_DIR = os.path.join(ROOT_DIR, 'models')
OUTPUT_DIR = os.path.join(ROOT_DIR, 'results')

# Corpus
CORPUS_PATH = os.path.join(DATA_DIR, 'Sentences_AllAgree.txt')
CORPUS_DELIMITER = '@'
CORPUS_ENCODING = 'latin-1'   # Financial PhraseBank ships as latin-1
LABEL_MAP = {
    'negative': -1,
    'neutral': 0,
    'positive': 1,
}
SENTIMENT_LABELS = (-1, 0, 1)

# Characters that break downstream tabular conversion
DROP_ROW_CHARS = ('+',)
STRIP_CHARS = ('`',)

# Model paths
CLASSIFIER_MODEL_PATH = os.path.join(MODEL_DIR, 'sentiment', 'classifier.joblib')
REGRESSOR_MODEL_PATH = os.path.join(MODEL_DIR, 'sentiment', 'regressor.joblib')
RESULTS_PATH = os.path.join(OUTPUT_DIR, 'paragraph_sentiment.csv')

# Document segmentation
PARAGRAPH_DELIMITER = '.\n'
PAGE_IMAGE_ZOOM = 2.0

# Data split parameters
TEST_SIZE = 0.3       # Share of labeled examples held out for validation
RANDOM_STATE = 42

# Vectorizer parameters
NGRAM_RANGE = (1, 1)  # Bag of unigrams
MAX_FEATURES = None   # Keep the full vocabulary

# Estimator parameters
LOGREG_MAX_ITER = 1000
LOGREG_C = 1.0
RIDGE_ALPHA = 1.0

# NLTK resources needed by the text normalizer: (lookup path, download id)
NLTK_RESOURCES = [
    ('tokenizers/punkt', 'punkt'),
    ('tokenizers/punkt_tab', 'punkt_tab'),
    ('corpora/stopwords', 'stopwords'),
    ('corpora/wordnet', 'wordnet'),
    ('corpora/omw-1.4', 'omw-1.4'),
    ('taggers/averaged_perceptron_tagger', 'averaged_perceptron_tagger'),
    ('taggers/averaged_perceptron_tagger_eng', 'averaged_perceptron_tagger_eng'),
]
