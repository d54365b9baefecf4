"""Loading and cleaning of the labeled financial-phrase corpus.

The corpus is a plain-text file with one example per line::

    <sentence>@<neutral|positive|negative>

which is the layout of the Financial PhraseBank files. Each line becomes a
:class:`LabeledExample` with a numeric sentiment in {-1, 0, 1}. Any line that
cannot be parsed aborts the whole load, since a partially loaded corpus would
silently bias training.

Example:
    >>> loader = CorpusLoader()
    >>> examples = loader.clean(loader.load('data/Sentences_AllAgree.txt'))
    >>> loader.label_distribution(examples)
"""

import io
import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Union

import pandas as pd

from ..config import (CORPUS_DELIMITER, CORPUS_ENCODING, LABEL_MAP,
                      DROP_ROW_CHARS, STRIP_CHARS)
from ..errors import MalformedCorpusRow

logger = logging.getLogger('corpus_loader')


@dataclass(frozen=True)
class LabeledExample:
    """One labeled sentence: -1 negative, 0 neutral, 1 positive."""
    text: str
    sentiment: int
    line_number: int = field(default=0, compare=False)


class CorpusLoader:
    """Parse and clean ``<sentence>@<label>`` corpus files.

    Attributes:
        delimiter (str): Field separator between text and label.
        encoding (str): Encoding used when reading from a path.
        label_map (dict): Label word to sentiment value.
    """

    def __init__(self, delimiter=CORPUS_DELIMITER, encoding=CORPUS_ENCODING,
                 label_map=None):
        self.delimiter = delimiter
        self.encoding = encoding
        self.label_map = dict(label_map if label_map is not None else LABEL_MAP)

    def parse_line(self, line: str, line_number: int) -> LabeledExample:
        """Parse a single corpus line into its two fields.

        Raises:
            MalformedCorpusRow: If the line does not hold exactly one
                delimiter, or the label word is not one of the known labels.
        """
        line = line.rstrip('\r\n')
        if line.count(self.delimiter) != 1:
            raise MalformedCorpusRow(line_number, 'delimiter', line)

        text, label_word = line.split(self.delimiter)
        label_key = label_word.strip().lower()
        if label_key not in self.label_map:
            raise MalformedCorpusRow(line_number, 'label', label_word)

        return LabeledExample(text=text, sentiment=self.label_map[label_key],
                              line_number=line_number)

    def _open(self, source):
        if isinstance(source, (str, os.PathLike)):
            return io.open(source, 'r', encoding=self.encoding)
        return None

    def load(self, source: Union[str, os.PathLike, Iterable[str]]) -> List[LabeledExample]:
        """Load labeled examples from a path or an iterable of lines.

        Blank lines are skipped; every other line must parse.

        Args:
            source: Path to the corpus file, or any iterable of text lines
                (an open file, a list of strings).

        Returns:
            List[LabeledExample]: Examples in file order.

        Raises:
            FileNotFoundError: If ``source`` is a path that does not exist.
            MalformedCorpusRow: On the first line that cannot be parsed.
        """
        handle = self._open(source)
        lines = handle if handle is not None else source
        examples = []
        try:
            for line_number, line in enumerate(lines, start=1):
                if isinstance(line, bytes):
                    line = line.decode(self.encoding)
                if not line.strip():
                    continue
                examples.append(self.parse_line(line, line_number))
        except MalformedCorpusRow as e:
            logger.error(f"Error loading corpus: {e}")
            raise
        finally:
            if handle is not None:
                handle.close()

        logger.info(f"Loaded {len(examples)} labeled examples")
        return examples

    @staticmethod
    def to_frame(examples: Iterable[LabeledExample]) -> pd.DataFrame:
        """Convert examples to a DataFrame with text, sentiment and line_number columns."""
        return pd.DataFrame(
            [(e.text, e.sentiment, e.line_number) for e in examples],
            columns=['text', 'sentiment', 'line_number'],
        )

    def clean(self, examples: Iterable[LabeledExample]) -> List[LabeledExample]:
        """Apply the data-quality filter to loaded examples.

        Rows whose text contains a literal "+" are dropped; backticks are
        stripped from the remaining rows. Applying ``clean`` to already clean
        data returns it unchanged.

        Args:
            examples (Iterable[LabeledExample]): Loaded examples.

        Returns:
            List[LabeledExample]: Cleaned examples, order preserved.
        """
        df = self.to_frame(examples)
        if df.empty:
            return []

        keep = pd.Series(True, index=df.index)
        for ch in DROP_ROW_CHARS:
            keep &= ~df['text'].str.contains(ch, regex=False)
        dropped = int((~keep).sum())
        df = df[keep].copy()

        for ch in STRIP_CHARS:
            df['text'] = df['text'].str.replace(ch, '', regex=False)

        if dropped:
            logger.info(f"Dropped {dropped} rows containing {DROP_ROW_CHARS}")

        return [
            LabeledExample(text=row.text, sentiment=int(row.sentiment),
                           line_number=int(row.line_number))
            for row in df.itertuples(index=False)
        ]

    def label_distribution(self, examples: Iterable[LabeledExample]) -> pd.Series:
        """Count examples per sentiment value.

        Returns:
            pd.Series: Counts indexed by -1, 0 and 1 (zero for absent labels).
        """
        df = self.to_frame(examples)
        counts = df['sentiment'].value_counts().reindex(
            sorted(set(self.label_map.values())), fill_value=0)
        if len(df) > 0:
            shares = ', '.join(f"{label}={count / len(df) * 100:.1f}%"
                               for label, count in counts.items())
            logger.info(f"Label distribution: {shares}")
        return counts


def load(source) -> List[LabeledExample]:
    """Load a corpus with the default delimiter and encoding."""
    return CorpusLoader().load(source)


def clean(examples) -> List[LabeledExample]:
    """Clean examples with the default filter."""
    return CorpusLoader().clean(examples)
