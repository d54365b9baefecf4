"""Text normalization module for financial sentiment analysis.

This module provides the TextNormalizer class which turns free text into the
canonical token stream used everywhere in the project: by the vectorizer at
fit time on the labeled corpus, and again at inference time on paragraphs
extracted from PDF reports. Both sides must go through exactly the same
function, otherwise the learned vocabulary and the inference tokens drift
apart.

The normalization steps are:
    1. Tokenize with NLTK's ``word_tokenize``.
    2. Tag parts of speech and lemmatize each token with WordNet.
    3. Lowercase and strip the lemma (falling back to the lowercased surface form).
    4. Drop English stop-words and punctuation-only tokens.

Examples:
    Basic usage of the normalizer:

    >>> from finsentiment.data.text_processor import TextNormalizer
    >>> normalizer = TextNormalizer()
    >>> normalizer.normalize("The company reported strong growth.")
    ['company', 'report', 'strong', 'growth']
"""

import logging
import string
import unicodedata
from functools import lru_cache
from typing import Iterable, List

import nltk
from nltk.corpus import stopwords
from nltk.stem import WordNetLemmatizer
from nltk.tokenize import word_tokenize

from ..config import NLTK_RESOURCES

# Set up logging
logger = logging.getLogger('text_processor')

# Penn Treebank tag prefix -> WordNet part of speech
_WORDNET_POS = {
    'J': 'a',
    'V': 'v',
    'N': 'n',
    'R': 'r',
}


def ensure_nltk_data(resources=NLTK_RESOURCES):
    """Download the NLTK resources used by the normalizer if not already present.

    Args:
        resources (list): ``(lookup_path, download_id)`` pairs. Defaults to
            NLTK_RESOURCES from config.
    """
    for path, package in resources:
        try:
            nltk.data.find(path)
        except LookupError:
            logger.info(f"Downloading NLTK resource '{package}'")
            nltk.download(package, quiet=True)


@lru_cache(maxsize=None)
def get_linguistic_resources():
    """Return the process-wide lemmatizer and stop-word set.

    Resources are initialized once on first use and never mutated afterwards,
    so they can be shared by every normalizer instance.

    Returns:
        tuple: ``(WordNetLemmatizer, frozenset of stop-words)``
    """
    ensure_nltk_data()
    lemmatizer = WordNetLemmatizer()
    stop_words = frozenset(stopwords.words('english'))
    logger.info(f"Loaded linguistic resources with {len(stop_words)} stop-words")
    return lemmatizer, stop_words


def is_punctuation(token):
    """Return True when every character of ``token`` is punctuation."""
    if not token:
        return False
    return all(
        ch in string.punctuation or unicodedata.category(ch).startswith('P')
        for ch in token
    )


class TextNormalizer:
    """Deterministic text to token-sequence normalizer.

    The normalizer holds no fitted state; the NLTK resources it relies on are
    loaded lazily through :func:`get_linguistic_resources`. Instances are
    cheap, picklable and can be frozen into a trained sentiment model.

    Attributes:
        extra_stop_words (frozenset): Stop-words added on top of the NLTK
            English list.
    """

    def __init__(self, extra_stop_words: Iterable[str] = ()):
        self.extra_stop_words = frozenset(w.lower() for w in extra_stop_words)

    @property
    def stop_words(self):
        _, stop_words = get_linguistic_resources()
        return stop_words | self.extra_stop_words

    def _lemma(self, lemmatizer, token, tag):
        surface = token.lower()
        pos = _WORDNET_POS.get(tag[:1], 'n')
        lemma = lemmatizer.lemmatize(surface, pos)
        if not lemma or not lemma.strip():
            return surface
        return lemma

    def normalize(self, text) -> List[str]:
        """Normalize free text into a list of canonical tokens.

        Args:
            text (str): Raw text. Non-string or empty input is accepted and
                yields an empty list.

        Returns:
            List[str]: Lowercased lemmas in original order, without
                stop-words and punctuation-only tokens.

        Example:
            >>> TextNormalizer().normalize("Losses widened.")
            ['loss', 'widen']
        """
        if not isinstance(text, str) or not text.strip():
            return []

        lemmatizer, _ = get_linguistic_resources()
        stop_words = self.stop_words

        tokens = word_tokenize(text)
        tagged = nltk.pos_tag(tokens)

        result = []
        for token, tag in tagged:
            lemma = self._lemma(lemmatizer, token, tag).lower().strip()
            if not lemma or lemma in stop_words or is_punctuation(lemma):
                continue
            result.append(lemma)
        return result

    def normalize_many(self, texts: Iterable[str]) -> List[List[str]]:
        """Normalize a batch of texts.

        A text that cannot be normalized is logged and contributes an empty
        token list, so one bad unit does not block the rest of the batch.

        Args:
            texts (Iterable[str]): Texts to normalize.

        Returns:
            List[List[str]]: One token list per input text, in input order.
        """
        sequences = []
        for i, text in enumerate(texts):
            try:
                sequences.append(self.normalize(text))
            except (ValueError, TypeError) as e:
                logger.warning(f"Could not normalize text #{i}: {e}")
                sequences.append([])
        logger.debug(f"Normalized {len(sequences)} texts")
        return sequences

    def __call__(self, text) -> List[str]:
        return self.normalize(text)

    def __eq__(self, other):
        return (isinstance(other, TextNormalizer)
                and self.extra_stop_words == other.extra_stop_words)

    def __hash__(self):
        return hash(self.extra_stop_words)


def normalize(text) -> List[str]:
    """Normalize ``text`` with a default :class:`TextNormalizer`."""
    return TextNormalizer().normalize(text)
