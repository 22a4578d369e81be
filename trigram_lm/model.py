"""
Trigram Language Model Implementation

This module contains the LanguageModel class that owns the trained frequency
tables and exposes both smoothing methods through one interface.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .config import ModelConfig
from .corpus import START_TOKEN, END_TOKEN
from .evaluation import perplexity, sentence_log2_probability
from .smoothing import Estimator, SmoothingMethod, get_estimator
from .tables import FrequencyTables, History, train


logger = logging.getLogger(__name__)


class LanguageModel:
    """
    Trigram Language Model

    Attributes:
        config: Smoothing parameters
        tables: Frequency tables (None until trained)
        estimators: One estimator per smoothing method, built on training
        training_stats: Summary of the last training run
    """

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the model.

        Args:
            config: Smoothing parameters (defaults to ModelConfig())
        """
        self.config = config or ModelConfig()
        self.tables: Optional[FrequencyTables] = None
        self.estimators: Dict[SmoothingMethod, Estimator] = {}
        self.is_trained = False
        self.training_stats: Dict = {}

    def train(self, sentences: List[List[str]],
              progress_callback: Optional[Callable[[int, int, str], None]] = None) -> Dict:
        """
        Train the model on marked sentences.

        Args:
            sentences: Sentences wrapped in <s> <s> ... </s>
            progress_callback: Optional callback(current, total, stage) for progress

        Returns:
            Dictionary of training statistics
        """
        if progress_callback:
            progress_callback(0, 2, "Counting n-grams")

        self.tables = train(sentences)

        if progress_callback:
            progress_callback(1, 2, "Initializing estimators")

        self.estimators = {
            method: get_estimator(method, self.tables, self.config)
            for method in SmoothingMethod
        }
        self.is_trained = True

        self.training_stats = {
            'num_sentences': len(sentences),
            'total_tokens': self.tables.total_tokens,
            'vocab_size': len(self.tables.unigram),
            'unique_bigrams': sum(len(c) for c in self.tables.bigram.values()),
            'unique_trigrams': sum(len(c) for c in self.tables.trigram.values()),
            'discount': self.config.discount,
            'lambdas': ", ".join(f"{x:g}" for x in self.config.lambdas),
            'k': self.config.k,
        }
        logger.info("Trained on %d sentences (%d tokens, %d types)",
                    self.training_stats['num_sentences'],
                    self.training_stats['total_tokens'],
                    self.training_stats['vocab_size'])

        if progress_callback:
            progress_callback(2, 2, "Complete")

        return self.training_stats

    def estimator(self, method=SmoothingMethod.BACKOFF) -> Estimator:
        """Return the trained estimator for a smoothing method."""
        if not self.is_trained:
            raise RuntimeError("Model must be trained before computing probabilities")
        return self.estimators[SmoothingMethod(method)]

    def probability(self, word: str, history: History,
                    method=SmoothingMethod.BACKOFF) -> float:
        """
        Calculate P(word | history).

        Args:
            word: The word to calculate probability for
            history: The two preceding tokens (older, newer)
            method: Smoothing method to use

        Returns:
            Probability of word given history
        """
        return self.estimator(method).estimate(tuple(history), word)

    def sentence_log_probability(self, sentence: List[str],
                                 method=SmoothingMethod.BACKOFF) -> float:
        """Log2 probability of a marked sentence."""
        return sentence_log2_probability(sentence, self.estimator(method))

    def perplexity(self, sentences: List[List[str]],
                   method=SmoothingMethod.BACKOFF,
                   round_places: Optional[int] = None,
                   progress_callback=None) -> float:
        """
        Calculate perplexity on a set of marked sentences.

        Back-off leaves sentences with a log probability of exactly 0 out
        of the sum; interpolation counts every sentence.

        Args:
            sentences: Marked sentences
            method: Smoothing method to use
            round_places: Optional rounding of the average log probability
            progress_callback: Optional callback(current, total) for progress

        Returns:
            Perplexity score (lower is better)
        """
        estimator = self.estimator(method)
        return perplexity(
            sentences, estimator,
            exclude_zero_sentences=estimator.method == SmoothingMethod.BACKOFF,
            round_places=round_places,
            progress_callback=progress_callback,
        )

    def next_word_distribution(self, history: History, top_k: int = 10,
                               method=SmoothingMethod.BACKOFF) -> List[Tuple[str, float]]:
        """
        Get the most probable known words after a history.

        Args:
            history: The two preceding tokens
            top_k: Number of top words to return
            method: Smoothing method to use

        Returns:
            List of (word, probability) tuples, sorted by probability
        """
        estimator = self.estimator(method)
        history = tuple(history)

        probs = [(word, estimator.estimate(history, word))
                 for word in self.tables.unigram if word != START_TOKEN]

        probs.sort(key=lambda x: (-x[1], x[0]))
        return probs[:top_k]

    def get_top_words(self, top_k: int = 100) -> List[Tuple[str, int]]:
        """Get the most frequent words, sentinels excluded."""
        if not self.is_trained:
            raise RuntimeError("Model must be trained first")

        filtered = [(w, c) for w, c in self.tables.unigram.items()
                    if w not in (START_TOKEN, END_TOKEN)]
        filtered.sort(key=lambda x: (-x[1], x[0]))
        return filtered[:top_k]
