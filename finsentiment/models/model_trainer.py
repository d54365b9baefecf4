"""
Training, evaluation and persistence of sentiment models.

This module provides functionality for:
1. Splitting labeled examples into training and validation sets
2. Fitting a vectorizer and an estimator together as one SentimentModel
3. Predicting sentiment for raw text through the model's own normalizer
4. Evaluating models (accuracy for classification, MAE for regression)
5. Saving and loading fitted models

Two modes are supported. Classification predicts one of {-1, 0, 1};
regression treats the label as a numeric target and predicts a continuous
score.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np
from sklearn.dummy import DummyClassifier
from sklearn.linear_model import LogisticRegression, Ridge
from sklearn.metrics import (accuracy_score, classification_report, confusion_matrix,
                             f1_score, mean_absolute_error, mean_squared_error,
                             precision_score, r2_score, recall_score)
from sklearn.model_selection import train_test_split

from ..config import (TEST_SIZE, RANDOM_STATE, NGRAM_RANGE, MAX_FEATURES,
                      LOGREG_MAX_ITER, LOGREG_C, RIDGE_ALPHA, SENTIMENT_LABELS)
from ..data.corpus_loader import CorpusLoader, LabeledExample
from ..data.text_processor import TextNormalizer
from ..errors import EmptyTrainingSet, ModelFitError, VocabularyMismatch
from ..nlp.nlp_processing import FeatureVectorizer
from ..utils.utils import compute_data_hash, load_joblib, save_joblib

logger = logging.getLogger('model_trainer')

CLASSIFICATION = 'classification'
REGRESSION = 'regression'
MODES = (CLASSIFICATION, REGRESSION)

LABEL_NAMES = ['negative', 'neutral', 'positive']


def _check_mode(mode: str) -> str:
    mode = str(mode).lower()
    if mode not in MODES:
        raise ValueError(f"Unknown model mode '{mode}', expected one of {MODES}")
    return mode


def build_estimator(mode: str, labels: Sequence, random_state: int = RANDOM_STATE):
    """Create the untrained estimator for ``mode``.

    A classification training set holding a single label cannot be fit by
    logistic regression; it gets a majority-class classifier instead, which
    predicts that label for every input.

    Args:
        mode (str): 'classification' or 'regression'.
        labels (Sequence): Training labels, used to detect single-label sets.
        random_state (int, optional): Seed for the estimator. Defaults to
            RANDOM_STATE from config.

    Returns:
        An unfitted scikit-learn estimator.
    """
    mode = _check_mode(mode)
    if mode == CLASSIFICATION:
        if len(set(labels)) < 2:
            logger.warning("Training labels hold a single class; "
                           "using a majority-class classifier")
            return DummyClassifier(strategy='most_frequent')
        return LogisticRegression(max_iter=LOGREG_MAX_ITER, C=LOGREG_C,
                                  random_state=random_state)
    return Ridge(alpha=RIDGE_ALPHA)


class SentimentModel:
    """A normalizer, vectorizer and estimator fitted together.

    The three parts are produced by one ``SentimentPipeline.fit`` call and are
    only ever used together: raw text goes through this model's normalizer
    and vocabulary before reaching its estimator. There is no API for
    replacing one part, and no incremental fitting.

    Attributes:
        mode (str): 'classification' or 'regression'.
        normalizer (TextNormalizer): Text to token normalizer.
        vectorizer (FeatureVectorizer): Vectorizer owning the vocabulary.
        estimator: Fitted scikit-learn estimator.
        metadata (dict): Training details (split sizes, seed, corpus hash,
            validation metric).
    """

    def __init__(self, mode, normalizer, vectorizer, estimator, metadata=None):
        self.mode = _check_mode(mode)
        self.normalizer = normalizer
        self.vectorizer = vectorizer
        self.estimator = estimator
        self.metadata = dict(metadata or {})
        # Frozen at construction; refitting the vectorizer does not change it
        self._vocabulary = vectorizer.vocabulary
        self.check_consistency()

    @property
    def vocabulary(self):
        return self._vocabulary

    def check_consistency(self):
        """Verify the estimator was fit on this model's vocabulary.

        Called on construction and again on load, so a model never pairs an
        estimator with a vocabulary of a different width.

        Raises:
            VocabularyMismatch: If there is no vocabulary, or the estimator's
                input width differs from the vocabulary size.
        """
        n_features = getattr(self.estimator, 'n_features_in_', None)
        if self.vocabulary is None:
            raise VocabularyMismatch("model has no fitted vocabulary")
        if n_features is not None and n_features != len(self.vocabulary):
            raise VocabularyMismatch(
                f"estimator expects {n_features} features but the vocabulary "
                f"has {len(self.vocabulary)} terms")

    def featurize(self, texts: Sequence[str]):
        """Normalize and vectorize raw texts into a count matrix."""
        tokens = self.normalizer.normalize_many(texts)
        return self.vectorizer.transform(tokens, self._vocabulary)

    def predict(self, texts: Sequence[str]) -> np.ndarray:
        """Predict sentiment for raw texts.

        Args:
            texts (Sequence[str]): Raw text units.

        Returns:
            np.ndarray: Integer labels in {-1, 0, 1} for classification,
                float scores for regression; one per input text.
        """
        if isinstance(texts, str):
            raise TypeError("predict expects a sequence of texts, not a single string")
        texts = list(texts)
        if not texts:
            return np.array([], dtype=int if self.mode == CLASSIFICATION else float)

        predictions = self.estimator.predict(self.featurize(texts))
        if self.mode == CLASSIFICATION:
            return np.asarray(predictions).astype(int)
        return np.asarray(predictions, dtype=float)

    def evaluate(self, examples: Iterable[LabeledExample]) -> float:
        """Score the model on held-out examples.

        Returns:
            float: Accuracy for classification, mean absolute error for
                regression.

        Raises:
            ValueError: If ``examples`` is empty, or a classifier produced a
                label outside {-1, 0, 1}.
        """
        examples = list(examples)
        if not examples:
            raise ValueError("Cannot evaluate on an empty set of examples")

        y_true = np.array([e.sentiment for e in examples])
        y_pred = self.predict([e.text for e in examples])

        if self.mode == CLASSIFICATION:
            _check_label_domain(y_pred)
            return float(accuracy_score(y_true, y_pred))
        return float(mean_absolute_error(y_true.astype(float), y_pred))

    def __repr__(self):
        size = len(self.vocabulary) if self.vocabulary is not None else 0
        return (f"SentimentModel(mode={self.mode!r}, "
                f"estimator={type(self.estimator).__name__}, vocabulary_size={size})")


def _check_label_domain(y_pred):
    outside = ~np.isin(y_pred, SENTIMENT_LABELS)
    if outside.any():
        raise ValueError(f"Classifier produced labels outside {SENTIMENT_LABELS}: "
                         f"{sorted(set(np.asarray(y_pred)[outside].tolist()))}")


class SentimentPipeline:
    """Fit sentiment models from labeled examples.

    The pipeline owns the train/validation split and guarantees that the
    vectorizer and estimator of a model come from the same fit call.

    Attributes:
        mode (str): 'classification' or 'regression'.
        test_size (float): Share of examples held out for validation.
        random_state (int): Seed for the split and the estimator.
        normalizer (TextNormalizer): Normalizer frozen into fitted models.
        train_examples (list): Training split of the last fit.
        validation_examples (list): Validation split of the last fit.
    """

    def __init__(self, mode: str = CLASSIFICATION, test_size: float = TEST_SIZE,
                 random_state: int = RANDOM_STATE, normalizer: TextNormalizer = None,
                 ngram_range: Tuple[int, int] = NGRAM_RANGE,
                 max_features: int = MAX_FEATURES):
        self.mode = _check_mode(mode)
        self.test_size = test_size
        self.random_state = random_state
        self.normalizer = normalizer if normalizer is not None else TextNormalizer()
        self.ngram_range = ngram_range
        self.max_features = max_features
        self.train_examples = None
        self.validation_examples = None

    def split(self, examples: Sequence[LabeledExample]) -> Tuple[List, List]:
        """Split examples into training and validation sets.

        The split is shuffled with a fixed seed, so the same examples always
        produce the same partition.

        Raises:
            EmptyTrainingSet: If there are no examples.
            ModelFitError: If there are too few examples for the split ratio.
        """
        examples = list(examples)
        if not examples:
            raise EmptyTrainingSet()

        try:
            train, validation = train_test_split(
                examples,
                test_size=self.test_size,
                random_state=self.random_state,
                shuffle=True,
            )
        except ValueError as e:
            ratio = f"{1 - self.test_size:.0%}/{self.test_size:.0%}"
            raise ModelFitError(
                'split', f"too few examples ({len(examples)}) for a {ratio} split: {e}") from e

        logger.info(f"Data split complete: train={len(train)}, validation={len(validation)}")
        return list(train), list(validation)

    def fit(self, examples: Iterable[LabeledExample]) -> SentimentModel:
        """Fit a SentimentModel on the training split of ``examples``.

        Steps: split, normalize the training texts, fit the vocabulary, fit
        the estimator, then score the model on the validation split.

        Args:
            examples (Iterable[LabeledExample]): Cleaned labeled examples.

        Returns:
            SentimentModel: The fitted model; its metadata holds the
                validation metric.

        Raises:
            EmptyTrainingSet: If ``examples`` is empty.
            ModelFitError: If the split, the vectorizer or the estimator fails.
        """
        examples = list(examples)
        train, validation = self.split(examples)
        self.train_examples = train
        self.validation_examples = validation

        logger.info(f"Fitting {self.mode} model on {len(train)} examples")
        tokens = self.normalizer.normalize_many([e.text for e in train])

        vectorizer = FeatureVectorizer(ngram_range=self.ngram_range,
                                       max_features=self.max_features)
        X_train = vectorizer.fit_transform(tokens)

        y_train = np.array([e.sentiment for e in train])
        if self.mode == REGRESSION:
            y_train = y_train.astype(float)

        estimator = build_estimator(self.mode, y_train.tolist(), self.random_state)
        try:
            estimator.fit(X_train, y_train)
        except ValueError as e:
            raise ModelFitError('estimator', f"{type(estimator).__name__}: {e}") from e

        metadata = {
            'mode': self.mode,
            'estimator': type(estimator).__name__,
            'train_size': len(train),
            'validation_size': len(validation),
            'test_size': self.test_size,
            'random_state': self.random_state,
            'vocabulary_size': len(vectorizer.vocabulary),
            'corpus_hash': compute_data_hash(CorpusLoader.to_frame(examples)),
            'trained_at': datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        }
        model = SentimentModel(self.mode, self.normalizer, vectorizer, estimator, metadata)

        metric_name = 'accuracy' if self.mode == CLASSIFICATION else 'mae'
        model.metadata['validation_metric'] = metric_name
        model.metadata['validation_score'] = model.evaluate(validation)
        logger.info(f"Validation {metric_name}: {model.metadata['validation_score']:.4f}")

        return model

    def predict(self, model: SentimentModel, texts: Sequence[str]) -> np.ndarray:
        return model.predict(texts)

    def evaluate(self, model: SentimentModel, examples: Iterable[LabeledExample]) -> float:
        return model.evaluate(examples)


def fit(examples: Iterable[LabeledExample], mode: str = CLASSIFICATION, **kwargs) -> SentimentModel:
    """Fit a sentiment model in the given mode.

    Args:
        examples (Iterable[LabeledExample]): Cleaned labeled examples.
        mode (str): 'classification' or 'regression'.
        **kwargs: Passed to :class:`SentimentPipeline` (test_size,
            random_state, normalizer, ngram_range, max_features).

    Returns:
        SentimentModel: The fitted model.

    Examples:
        >>> classifier = fit(examples, mode='classification')
        >>> regressor = fit(examples, mode='regression')
        >>> classifier.predict(["Net sales rose 12%."])
    """
    return SentimentPipeline(mode=mode, **kwargs).fit(examples)


def predict(model: SentimentModel, texts: Sequence[str]) -> np.ndarray:
    """Predict sentiment labels or scores for raw texts."""
    return model.predict(texts)


def evaluate(model: SentimentModel, examples: Iterable[LabeledExample]) -> float:
    """Return accuracy (classification) or MAE (regression) on ``examples``."""
    return model.evaluate(examples)


def evaluate_detailed(model: SentimentModel, examples: Iterable[LabeledExample]) -> Dict:
    """Evaluate a model with the full set of metrics for its mode.

    Args:
        model (SentimentModel): Fitted model.
        examples (Iterable[LabeledExample]): Held-out examples.

    Returns:
        dict: For classification:
            {
                'accuracy', 'precision', 'recall', 'f1' (macro averages),
                'confusion_matrix' (rows/cols ordered -1, 0, 1),
                'classification_report' (str), 'predictions'
            }
            For regression:
            {
                'mae', 'mse', 'rmse', 'r2', 'predictions'
            }
    """
    examples = list(examples)
    if not examples:
        raise ValueError("Cannot evaluate on an empty set of examples")

    y_true = np.array([e.sentiment for e in examples])
    y_pred = model.predict([e.text for e in examples])

    if model.mode == CLASSIFICATION:
        _check_label_domain(y_pred)
        labels = list(SENTIMENT_LABELS)
        return {
            'accuracy': accuracy_score(y_true, y_pred),
            'precision': precision_score(y_true, y_pred, labels=labels, average='macro', zero_division=0),
            'recall': recall_score(y_true, y_pred, labels=labels, average='macro', zero_division=0),
            'f1': f1_score(y_true, y_pred, labels=labels, average='macro', zero_division=0),
            'confusion_matrix': confusion_matrix(y_true, y_pred, labels=labels),
            'classification_report': classification_report(
                y_true, y_pred, labels=labels, target_names=LABEL_NAMES, zero_division=0),
            'predictions': y_pred,
        }

    y_true = y_true.astype(float)
    mse = mean_squared_error(y_true, y_pred)
    results = {
        'mae': mean_absolute_error(y_true, y_pred),
        'mse': mse,
        'rmse': float(np.sqrt(mse)),
        'predictions': y_pred,
    }
    # r2 is undefined for fewer than two samples
    if len(examples) > 1:
        results['r2'] = r2_score(y_true, y_pred)
    return results


def save_model(model: SentimentModel, path: str) -> None:
    """Persist a fitted model (normalizer, vocabulary and estimator) to ``path``."""
    if not isinstance(model, SentimentModel):
        raise TypeError(f"Expected a SentimentModel, got {type(model).__name__}")
    save_joblib(model, path)
    logger.info(f"{model.mode.capitalize()} model saved to {path}")


def load_model(path: str) -> SentimentModel:
    """Load a model saved with :func:`save_model`.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        TypeError: If the file does not hold a SentimentModel.
        VocabularyMismatch: If the stored estimator does not match the stored
            vocabulary.
    """
    model = load_joblib(path)
    if not isinstance(model, SentimentModel):
        raise TypeError(f"{path} does not contain a SentimentModel")
    model.check_consistency()
    logger.info(f"Loaded {model!r} from {path}")
    return model
