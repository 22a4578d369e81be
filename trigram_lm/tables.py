"""
Frequency Tables

Unigram, bigram and trigram counts built from marked sentences. Every
accessor treats a missing history or word as a count of 0.
"""

import logging
from collections import Counter
from types import MappingProxyType
from typing import Dict, Generator, Iterable, List, Mapping, NamedTuple, Tuple

from .corpus import START_TOKEN, END_TOKEN
from .errors import DataError


logger = logging.getLogger(__name__)

History = Tuple[str, str]

_EMPTY: Mapping[str, int] = MappingProxyType({})


class FrequencyTables(NamedTuple):
    """
    Immutable count tables for a trained model.

    Unpacks as ``unigram, bigram, trigram``.

    Attributes:
        unigram: token -> count
        bigram: history token -> (next token -> count)
        trigram: (older, newer) history -> (next token -> count)
    """
    unigram: Mapping[str, int]
    bigram: Mapping[str, Mapping[str, int]]
    trigram: Mapping[History, Mapping[str, int]]

    def unigram_count(self, word: str) -> int:
        return self.unigram.get(word, 0)

    def bigram_count(self, history: str, word: str) -> int:
        return self.bigram.get(history, _EMPTY).get(word, 0)

    def trigram_count(self, history: History, word: str) -> int:
        return self.trigram.get(tuple(history), _EMPTY).get(word, 0)

    def bigram_continuations(self, history: str) -> Mapping[str, int]:
        """Words seen after ``history`` with their bigram counts."""
        return self.bigram.get(history, _EMPTY)

    def trigram_continuations(self, history: History) -> Mapping[str, int]:
        """Words seen after the pair ``history`` with their trigram counts."""
        return self.trigram.get(tuple(history), _EMPTY)

    @property
    def total_tokens(self) -> int:
        return sum(self.unigram.values())

    @property
    def vocabulary(self) -> frozenset:
        return frozenset(self.unigram)


def check_sentence(sentence: List[str]) -> None:
    """Raise DataError unless the sentence is wrapped in <s> <s> ... </s>."""
    if (len(sentence) < 3 or sentence[0] != START_TOKEN
            or sentence[1] != START_TOKEN or sentence[-1] != END_TOKEN):
        raise DataError(
            f"sentence must start with two {START_TOKEN} and end with "
            f"{END_TOKEN}: {sentence!r}")


def sentence_ngrams(sentence: List[str], n: int) -> Generator[Tuple[str, ...], None, None]:
    """
    Generate the n-grams of a marked sentence.

    Args:
        sentence: Marked sentence
        n: The n in n-gram

    Yields:
        N-gram tuples
    """
    for i in range(len(sentence) - n + 1):
        yield tuple(sentence[i:i + n])


def train(sentences: Iterable[List[str]]) -> FrequencyTables:
    """
    Count unigrams, bigrams and trigrams over marked sentences.

    Sentinels are counted like any other token. No pruning or
    minimum-count filtering is applied.

    Args:
        sentences: Sentences wrapped in <s> <s> ... </s>

    Returns:
        FrequencyTables with read-only mappings

    Raises:
        DataError: If there are no sentences or one is not properly marked
    """
    unigram: Counter = Counter()
    bigram: Dict[str, Counter] = {}
    trigram: Dict[History, Counter] = {}
    num_sentences = 0

    for sentence in sentences:
        check_sentence(sentence)
        num_sentences += 1

        unigram.update(sentence)
        for h, w in sentence_ngrams(sentence, 2):
            bigram.setdefault(h, Counter())[w] += 1
        for h2, h1, w in sentence_ngrams(sentence, 3):
            trigram.setdefault((h2, h1), Counter())[w] += 1

    if num_sentences == 0:
        raise DataError("cannot train on an empty corpus")

    logger.debug("Counted %d sentences: %d types, %d bigram histories, "
                 "%d trigram histories", num_sentences, len(unigram),
                 len(bigram), len(trigram))

    return FrequencyTables(
        unigram=MappingProxyType(dict(unigram)),
        bigram=MappingProxyType({h: MappingProxyType(dict(c))
                                 for h, c in bigram.items()}),
        trigram=MappingProxyType({h: MappingProxyType(dict(c))
                                  for h, c in trigram.items()}),
    )
