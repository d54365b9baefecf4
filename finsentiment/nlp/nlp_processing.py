"""Feature vectorization for financial sentiment models.

This module turns normalized token sequences into count vectors. It wraps
scikit-learn's CountVectorizer over pre-tokenized input, so the tokens fed to
it are exactly the output of
:class:`~finsentiment.data.text_processor.TextNormalizer` and no second
tokenization happens inside the vectorizer.

The vocabulary learned at fit time is returned as an immutable
:class:`Vocabulary`. It is the single source of truth for column indices and
is reused, unchanged, by every later transform and prediction.
"""

import logging
from collections.abc import Mapping
from typing import Iterable, List, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from ..config import NGRAM_RANGE, MAX_FEATURES
from ..errors import ModelFitError

logger = logging.getLogger('nlp_processing')


def _identity(tokens):
    return tokens


class Vocabulary(Mapping):
    """Read-only mapping from token to feature column index.

    Columns follow the order of ``terms``. The object exposes no mutators
    and rejects attribute assignment once constructed.
    """

    __slots__ = ('_terms', '_index')

    def __init__(self, terms: Iterable[str]):
        terms = tuple(terms)
        index = {term: i for i, term in enumerate(terms)}
        if len(index) != len(terms):
            raise ValueError("Vocabulary terms must be unique")
        object.__setattr__(self, '_terms', terms)
        object.__setattr__(self, '_index', index)

    def __setattr__(self, name, value):
        raise AttributeError("Vocabulary is immutable")

    def __delattr__(self, name):
        raise AttributeError("Vocabulary is immutable")

    def __reduce__(self):
        return (self.__class__, (self._terms,))

    def __getitem__(self, token):
        return self._index[token]

    def __iter__(self):
        return iter(self._terms)

    def __len__(self):
        return len(self._terms)

    def __hash__(self):
        return hash(self._terms)

    def __repr__(self):
        return f"Vocabulary(size={len(self._terms)})"

    @property
    def terms(self) -> Tuple[str, ...]:
        """Tokens in column order."""
        return self._terms

    def to_dict(self) -> dict:
        """Return a fresh, mutable copy of the token to index mapping."""
        return dict(self._index)


def _is_single_sequence(tokens) -> bool:
    return all(isinstance(t, str) for t in tokens)


class FeatureVectorizer:
    """Bag-of-words count vectorizer over normalized token sequences.

    Attributes:
        ngram_range (tuple): Range of n-grams counted. ``(1, 1)`` counts
            unigrams only.
        max_features (int or None): Optional cap on vocabulary size.
        vocabulary (Vocabulary or None): Vocabulary from the last ``fit``.
    """

    def __init__(self, ngram_range: Tuple[int, int] = NGRAM_RANGE,
                 max_features: int = MAX_FEATURES):
        self.ngram_range = tuple(ngram_range)
        self.max_features = max_features
        self.vocabulary = None
        self._count_vectorizer = None

        logger.info(f"Initialized FeatureVectorizer with ngram_range={self.ngram_range}")

    def _build_count_vectorizer(self, vocabulary=None) -> CountVectorizer:
        return CountVectorizer(
            tokenizer=_identity,
            preprocessor=_identity,
            token_pattern=None,
            lowercase=False,
            ngram_range=self.ngram_range,
            max_features=self.max_features if vocabulary is None else None,
            vocabulary=vocabulary,
            dtype=np.int64,
        )

    def fit(self, corpus: Iterable[Sequence[str]]) -> Vocabulary:
        """Learn the vocabulary of a corpus of token sequences.

        Args:
            corpus (Iterable[Sequence[str]]): Normalized token sequences.

        Returns:
            Vocabulary: Tokens in lexical order mapped to column indices.

        Raises:
            ModelFitError: If the corpus contains no tokens at all.
        """
        corpus = [list(tokens) for tokens in corpus]
        if not any(corpus):
            raise ModelFitError('vectorizer', 'empty vocabulary: the training texts '
                                'contain no tokens after normalization')

        count_vectorizer = self._build_count_vectorizer()
        try:
            count_vectorizer.fit(corpus)
        except ValueError as e:
            raise ModelFitError('vectorizer', str(e)) from e

        index = count_vectorizer.vocabulary_
        self.vocabulary = Vocabulary(sorted(index, key=index.get))
        self._count_vectorizer = self._build_count_vectorizer(self.vocabulary.to_dict())

        logger.info(f"Fitted vocabulary with {len(self.vocabulary)} terms "
                    f"from {len(corpus)} documents")
        return self.vocabulary

    def transform(self, tokens, vocabulary: Vocabulary = None):
        """Map token sequences onto count vectors.

        Tokens missing from the vocabulary are ignored, so a sequence made
        only of unseen tokens yields an all-zero vector.

        Args:
            tokens: A single token sequence, or a batch of token sequences.
            vocabulary (Vocabulary, optional): Vocabulary to index by. Defaults
                to the one learned by the last ``fit``.

        Returns:
            numpy.ndarray for a single sequence (shape ``(len(vocabulary),)``),
            scipy.sparse.csr_matrix for a batch (one row per sequence).

        Raises:
            ValueError: If no vocabulary is available.
            TypeError: If a raw string is passed instead of tokens.
        """
        if isinstance(tokens, str):
            raise TypeError("transform expects token sequences, not a raw string; "
                            "normalize the text first")

        if vocabulary is None or vocabulary is self.vocabulary:
            if self.vocabulary is None:
                raise ValueError("FeatureVectorizer has no vocabulary; call fit first")
            count_vectorizer = self._count_vectorizer
        else:
            count_vectorizer = self._build_count_vectorizer(vocabulary.to_dict())

        tokens = list(tokens)
        single = _is_single_sequence(tokens)
        batch = [tokens] if single else [list(seq) for seq in tokens]

        matrix = count_vectorizer.transform(batch)
        if single:
            return matrix.toarray()[0]
        return matrix.tocsr()

    def fit_transform(self, corpus: Iterable[Sequence[str]]):
        """Fit the vocabulary and return the corpus count matrix."""
        corpus = [list(tokens) for tokens in corpus]
        self.fit(corpus)
        return self._count_vectorizer.transform(corpus).tocsr()

    def get_feature_names(self) -> List[str]:
        """Return the vocabulary terms in column order."""
        if self.vocabulary is None:
            return []
        return list(self.vocabulary.terms)
