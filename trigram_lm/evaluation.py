"""
Perplexity Evaluation

Perplexity = 2^(-L/N), where L is the sum of log2 P(w_i | w_i-2, w_i-1) over
every predicted position and N counts every token of every sentence,
sentinels included.
"""

import math
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Optional

from .config import ModelConfig
from .errors import DataError
from .smoothing import BackoffEstimator, Estimator, InterpolationEstimator
from .tables import FrequencyTables


logger = logging.getLogger(__name__)


def sentence_log2_probability(sentence: List[str], estimator: Estimator) -> float:
    """
    Sum log2 probabilities over a marked sentence.

    The two leading start markers only serve as history; every position
    from the third token through the end marker is predicted.
    """
    total = 0.0
    for i in range(2, len(sentence)):
        total += math.log2(estimator.estimate((sentence[i - 2], sentence[i - 1]),
                                              sentence[i]))
    return total


def perplexity(sentences: List[List[str]], estimator: Estimator,
               exclude_zero_sentences: bool = False,
               round_places: Optional[int] = None,
               progress_callback: Optional[Callable[[int, int], None]] = None) -> float:
    """
    Calculate perplexity of an estimator on a set of sentences.

    Args:
        sentences: Marked sentences
        estimator: Estimator built on the training tables
        exclude_zero_sentences: Leave sentences whose log probability is
            exactly 0 out of the sum (their tokens still count in N). Such
            a sentence adds nothing to the sum either way, so the flag only
            keeps the back-off path in step with its historical definition
        round_places: Round L/N half-up to this many decimals before
            exponentiation; None keeps full precision
        progress_callback: Optional callback(current, total) for progress

    Returns:
        Perplexity score (lower is better)

    Raises:
        DataError: If there are no sentences to evaluate
    """
    total = len(sentences)
    if total == 0:
        raise DataError("cannot compute perplexity of an empty sentence list")

    log_sum = 0.0
    num_tokens = 0

    for idx, sentence in enumerate(sentences):
        log_prob = sentence_log2_probability(sentence, estimator)
        if not (exclude_zero_sentences and log_prob == 0):
            log_sum += log_prob
        num_tokens += len(sentence)

        if progress_callback and (idx + 1) % 100 == 0:
            progress_callback(idx + 1, total)

    if progress_callback:
        progress_callback(total, total)

    if num_tokens == 0:
        raise DataError("cannot compute perplexity over zero tokens")

    avg_log_prob = log_sum / num_tokens
    if round_places is not None:
        avg_log_prob = float(Decimal(avg_log_prob).quantize(
            Decimal(1).scaleb(-round_places), rounding=ROUND_HALF_UP))

    logger.debug("%s: L=%.4f over N=%d tokens in %d sentences",
                 estimator.method.value, log_sum, num_tokens, total)
    return 2 ** (-avg_log_prob)


def perplexity_backoff(sentences: List[List[str]], tables: FrequencyTables,
                       discount: float, k: float = 1.0,
                       round_places: Optional[int] = None) -> float:
    """Perplexity under discounted back-off; zero-sum sentences are skipped."""
    config = ModelConfig(discount=discount, k=k)
    return perplexity(sentences, BackoffEstimator(tables, config),
                      exclude_zero_sentences=True, round_places=round_places)


def perplexity_interpolation(sentences: List[List[str]], tables: FrequencyTables,
                             lambda1: float, lambda2: float, lambda3: float,
                             k: float = 1.0,
                             total_token_count: Optional[int] = None,
                             round_places: Optional[int] = None) -> float:
    """Perplexity under linear interpolation; every sentence counts."""
    config = ModelConfig(lambdas=(lambda1, lambda2, lambda3), k=k)
    estimator = InterpolationEstimator(tables, config,
                                       total_token_count=total_token_count)
    return perplexity(sentences, estimator, round_places=round_places)
