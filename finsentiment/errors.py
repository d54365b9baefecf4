"""Exception types raised by the financial sentiment pipeline.

Loading and fitting errors abort the call that raised them and carry enough
context (corpus line, page number, pipeline stage) for the caller to locate
the offending input.
"""


class FinSentimentError(Exception):
    """Base class for all errors raised by this package."""


class MalformedCorpusRow(FinSentimentError, ValueError):
    """A corpus line could not be parsed into text and sentiment label.

    Attributes:
        line_number (int): 1-based line number in the corpus source.
        field (str): Name of the field that failed ('delimiter' or 'label').
        value (str): The offending raw value.
    """

    def __init__(self, line_number, field, value):
        self.line_number = line_number
        self.field = field
        self.value = value
        super().__init__(
            f"Malformed corpus row at line {line_number}: "
            f"field '{field}' has invalid value {value!r}"
        )


class InvalidDocumentInput(FinSentimentError, ValueError):
    """The page sequence of a document is empty or unreadable."""

    def __init__(self, message, page_number=None):
        self.page_number = page_number
        if page_number is not None:
            message = f"page {page_number}: {message}"
        super().__init__(message)


class ModelFitError(FinSentimentError, ValueError):
    """Fitting a sentiment model failed at a given stage.

    Attributes:
        stage (str): 'split', 'vectorizer' or 'estimator'.
        reason (str): Human readable cause.
    """

    def __init__(self, stage, reason):
        self.stage = stage
        self.reason = reason
        super().__init__(f"Model fit failed at {stage} stage: {reason}")


class EmptyTrainingSet(ModelFitError):
    """Fit was called with no labeled examples left after cleaning."""

    def __init__(self, stage='split', reason='no labeled examples to train on'):
        super().__init__(stage, reason)


class VocabularyMismatch(FinSentimentError, ValueError):
    """A model's estimator was not fit against the model's own vocabulary."""
