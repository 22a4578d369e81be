"""
Smoothing Methods for the Trigram Language Model

This module implements the two estimators that turn frequency tables into
conditional probabilities P(w | w2, w1): discounted back-off and fixed-weight
linear interpolation. Both return a strictly positive probability for every
(history, word) pair, so a logarithm of zero can never occur downstream.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from .config import ModelConfig
from .tables import FrequencyTables, History


class SmoothingMethod(Enum):
    """Available smoothing methods."""
    BACKOFF = "backoff"                 # Discounted back-off
    INTERPOLATION = "interpolation"     # Linear interpolation


class Estimator:
    """Base class for estimators over trained frequency tables."""

    method: SmoothingMethod

    def __init__(self, tables: FrequencyTables, config: Optional[ModelConfig] = None):
        self.tables = tables
        self.config = config or ModelConfig()
        self.k = self.config.k

    def estimate(self, history: History, word: str) -> float:
        """Return P(word | history)."""
        raise NotImplementedError


class BackoffEstimator(Estimator):
    """
    Discounted Back-off

    A seen trigram keeps a discounted share of its relative frequency:

        P(w|w2,w1) = D * c(w2,w1,w) / (c(w2,w1) + K)

    The mass the discount frees, alpha(w2,w1), is redistributed to bigram
    estimates of words never seen after (w2,w1), renormalized over those
    words only. The same scheme moves leftover bigram mass alpha'(w1) down
    to unigram estimates, and a word never seen at all receives K in place
    of its count.
    """

    method = SmoothingMethod.BACKOFF

    def __init__(self, tables: FrequencyTables, config: Optional[ModelConfig] = None):
        super().__init__(tables, config)
        self.discount = self.config.discount
        self._total_tokens = tables.total_tokens
        # Tables never change after training, so per-history sums are reused
        self._trigram_cache: Dict[History, Tuple[float, int]] = {}
        self._bigram_cache: Dict[str, Tuple[float, int]] = {}

    def _trigram_normalizer(self, history: History) -> int:
        w2, w1 = history
        return self.tables.bigram_count(w2, w1)

    def _trigram_level(self, history: History) -> Tuple[float, int]:
        """Leftover trigram mass and the bigram renormalization base."""
        if history in self._trigram_cache:
            return self._trigram_cache[history]

        w1 = history[1]
        seen = self.tables.trigram_continuations(history)

        claimed = 0.0
        if seen:
            normalizer = self._trigram_normalizer(history) + self.k
            for count in seen.values():
                claimed += self.discount * count / normalizer

        denominator = sum(count for w, count
                          in self.tables.bigram_continuations(w1).items()
                          if w not in seen)

        result = (1.0 - claimed, denominator)
        self._trigram_cache[history] = result
        return result

    def _bigram_level(self, w1: str) -> Tuple[float, int]:
        """Leftover bigram mass and the unigram renormalization base."""
        if w1 in self._bigram_cache:
            return self._bigram_cache[w1]

        seen = self.tables.bigram_continuations(w1)

        claimed = 0.0
        if seen:
            normalizer = self.tables.unigram_count(w1) + self.k
            for count in seen.values():
                claimed += self.discount * count / normalizer

        # Every bigram continuation is itself a known word, so the words
        # not seen after w1 weigh the total minus the seen ones.
        denominator = self._total_tokens - sum(
            self.tables.unigram_count(w) for w in seen)

        result = (1.0 - claimed, denominator)
        self._bigram_cache[w1] = result
        return result

    def trigram_leftover(self, history: History) -> float:
        """alpha(w2, w1): probability mass left for unseen trigrams."""
        return self._trigram_level(tuple(history))[0]

    def bigram_leftover(self, w1: str) -> float:
        """alpha'(w1): probability mass left for unseen bigrams."""
        return self._bigram_level(w1)[0]

    def estimate(self, history: History, word: str) -> float:
        history = tuple(history)
        w1 = history[1]

        count = self.tables.trigram_count(history, word)
        if count:
            return (self.discount * count
                    / (self._trigram_normalizer(history) + self.k))

        count = self.tables.bigram_count(w1, word)
        if count:
            alpha, denominator = self._trigram_level(history)
            return self.discount * alpha * count / (denominator + self.k)

        alpha, denominator = self._bigram_level(w1)
        count = self.tables.unigram_count(word)
        if count:
            return self.discount * alpha * count / (denominator + self.k)

        # Out-of-vocabulary floor
        return self.discount * alpha * self.k / (denominator + self.k)


class InterpolationEstimator(Estimator):
    """
    Linear Interpolation

    P(w|w2,w1) = l1 * c(w2,w1,w) / c(w2,w1)
               + l2 * c(w1,w) / (c(w1) + K)
               + l3 * c(w) / (N + K)

    Each term only contributes when its count is nonzero. If all three are
    zero the word gets the unweighted floor K / (N + K).
    """

    method = SmoothingMethod.INTERPOLATION

    def __init__(self, tables: FrequencyTables, config: Optional[ModelConfig] = None,
                 total_token_count: Optional[int] = None):
        super().__init__(tables, config)
        self.lambdas = self.config.lambdas
        if total_token_count is None:
            total_token_count = tables.total_tokens
        self.total_token_count = total_token_count

    def estimate(self, history: History, word: str,
                 total_token_count: Optional[int] = None) -> float:
        if total_token_count is None:
            total_token_count = self.total_token_count
        lambda1, lambda2, lambda3 = self.lambdas
        w2, w1 = history

        p1 = 0.0
        count = self.tables.trigram_count((w2, w1), word)
        normalizer = self.tables.bigram_count(w2, w1)
        if count and normalizer:
            p1 = lambda1 * count / normalizer

        p2 = 0.0
        count = self.tables.bigram_count(w1, word)
        if count:
            p2 = lambda2 * count / (self.tables.unigram_count(w1) + self.k)

        p3 = 0.0
        count = self.tables.unigram_count(word)
        if count:
            p3 = lambda3 * count / (total_token_count + self.k)

        p = p1 + p2 + p3
        if p != 0:
            return p
        return self.k / (total_token_count + self.k)


def get_estimator(method, tables: FrequencyTables,
                  config: Optional[ModelConfig] = None, **kwargs) -> Estimator:
    """Factory function to create the estimator for a smoothing method."""
    method = SmoothingMethod(method)
    if method == SmoothingMethod.BACKOFF:
        return BackoffEstimator(tables, config)
    elif method == SmoothingMethod.INTERPOLATION:
        return InterpolationEstimator(
            tables, config, total_token_count=kwargs.get('total_token_count'))
    else:
        raise ValueError(f"Unknown smoothing method: {method}")
