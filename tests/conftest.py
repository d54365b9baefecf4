"""Shared fixtures for the financial sentiment test suite."""
import sys
from pathlib import Path

import pytest

# Ensure imports work from any directory
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from finsentiment.data.corpus_loader import LabeledExample


POSITIVE_SENTENCES = [
    "Net sales increased strongly and profit improved.",
    "Operating profit rose sharply thanks to strong demand.",
    "The company reported record revenue and robust growth.",
    "Earnings per share improved significantly from last year.",
    "Order intake grew and margins strengthened considerably.",
    "Profit rose and the outlook improved.",
    "Sales growth was excellent in all regions.",
    "The board is pleased with the strong quarterly profit.",
    "Revenue increased and operating margin improved.",
    "Demand grew strongly which boosted profit.",
]

NEGATIVE_SENTENCES = [
    "Net sales decreased and the company posted a loss.",
    "Operating profit fell sharply due to weak demand.",
    "The company reported a loss and declining revenue.",
    "Earnings per share dropped significantly from last year.",
    "Order intake declined and margins weakened considerably.",
    "Profit fell and the outlook worsened.",
    "Sales declined in all regions.",
    "The board warned of a weak quarterly loss.",
    "Revenue decreased and operating margin deteriorated.",
    "Demand weakened which hurt profit.",
]

NEUTRAL_SENTENCES = [
    "The annual general meeting will be held in Helsinki.",
    "The company is headquartered in Espoo, Finland.",
    "The report covers the period from January to March.",
    "The firm operates offices in twelve countries.",
    "The agreement was signed on Tuesday.",
    "The board consists of seven members.",
    "The shares are listed on the Nasdaq exchange.",
    "The company designs software for logistics firms.",
    "The interim report will be published in April.",
    "The group employs engineers and sales staff.",
]


@pytest.fixture
def sample_examples():
    """Balanced three-class labeled examples."""
    examples = []
    for sentences, label in ((POSITIVE_SENTENCES, 1),
                             (NEGATIVE_SENTENCES, -1),
                             (NEUTRAL_SENTENCES, 0)):
        examples.extend(LabeledExample(text=s, sentiment=label) for s in sentences)
    return examples


@pytest.fixture
def sample_corpus_lines():
    """The sample examples formatted as corpus lines."""
    words = {1: 'positive', -1: 'negative', 0: 'neutral'}
    lines = []
    for sentences, label in ((POSITIVE_SENTENCES, 1),
                             (NEGATIVE_SENTENCES, -1),
                             (NEUTRAL_SENTENCES, 0)):
        lines.extend(f"{s}@{words[label]}\n" for s in sentences)
    return lines
