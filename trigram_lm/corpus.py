"""
Corpus Loading and Preprocessing

This module reads raw text into cleaned, sentinel-wrapped sentences and
splits them into training, development and test partitions.
"""

import re
import logging
from typing import List, Optional, Tuple
from pathlib import Path

import nltk
from nltk.corpus import brown

from .config import SplitConfig
from .errors import ConfigurationError


logger = logging.getLogger(__name__)

# Special tokens
START_TOKEN = "<s>"
END_TOKEN = "</s>"

# Characters removed from every line before tokenization
_STRIP_CHARS = re.compile(r'[()%#@*&,.!?`"]')

Sentence = List[str]


def ensure_nltk_data():
    """Download the Brown corpus if it is not installed yet."""
    try:
        nltk.data.find('corpora/brown')
    except LookupError:
        logger.info("Downloading Brown corpus...")
        nltk.download('brown', quiet=True)


def preprocess_text(text: str) -> List[str]:
    """
    Lowercase a line, strip punctuation and split it into tokens.

    Args:
        text: Raw input line

    Returns:
        List of cleaned tokens (possibly empty)
    """
    text = _STRIP_CHARS.sub('', text.lower())
    return text.split()


def add_sentence_markers(tokens: List[str]) -> Sentence:
    """Wrap tokens in two start markers and one end marker."""
    return [START_TOKEN, START_TOKEN] + list(tokens) + [END_TOKEN]


def read_sentences(path) -> List[Sentence]:
    """
    Read a corpus file with one sentence per line.

    Args:
        path: Path to a UTF-8 text file

    Returns:
        Marked sentences in file order

    Raises:
        ConfigurationError: If the file is missing or unreadable
    """
    path = Path(path)
    try:
        with open(path, encoding='utf-8') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read corpus {path}: {e}") from e

    sentences = [add_sentence_markers(preprocess_text(line)) for line in lines]
    logger.debug("Read %d sentences from %s", len(sentences), path)
    return sentences


def split_sentences(sentences: List[Sentence],
                    split: Optional[SplitConfig] = None
                    ) -> Tuple[List[Sentence], List[Sentence], List[Sentence]]:
    """
    Split sentences positionally into train/dev/test partitions.

    The split is contiguous over the input order; no shuffling is done.
    The test partition receives every sentence after the dev partition.

    Args:
        sentences: Marked sentences
        split: Partition proportions (default 0.90 / 0.05 / 0.05)

    Returns:
        Tuple of (training, development, test) sentence lists
    """
    split = split or SplitConfig()
    total = len(sentences)

    train_end = int(split.train * total)
    dev_end = int(split.dev * total + train_end)

    return (list(sentences[:train_end]),
            list(sentences[train_end:dev_end]),
            list(sentences[dev_end:]))


def load_corpus(path, train: float = 0.90, dev: float = 0.05,
                test: float = 0.05
                ) -> Tuple[List[Sentence], List[Sentence], List[Sentence]]:
    """Read a corpus file and split it into (training, development, test)."""
    split = SplitConfig(train=train, dev=dev, test=test)
    return split_sentences(read_sentences(path), split)


def load_brown_corpus(categories: Optional[List[str]] = None) -> List[Sentence]:
    """
    Load the NLTK Brown corpus as marked sentences.

    Args:
        categories: Optional list of Brown corpus categories to load
                   (e.g., ['news', 'fiction']). If None, loads all.

    Returns:
        Marked sentences in corpus order
    """
    ensure_nltk_data()

    if categories:
        sents = brown.sents(categories=categories)
    else:
        sents = brown.sents()

    return [add_sentence_markers(preprocess_text(' '.join(sent)))
            for sent in sents]


def get_brown_categories() -> List[str]:
    """Return list of available Brown corpus categories."""
    ensure_nltk_data()
    return brown.categories()
