"""
Configuration for training, smoothing and corpus splitting.
"""

import math
import logging
from dataclasses import dataclass
from typing import Tuple

from .errors import ConfigurationError


logger = logging.getLogger(__name__)

SPLIT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class ModelConfig:
    """
    Smoothing parameters shared by both estimators.

    Attributes:
        discount: Back-off discount factor D, strictly between 0 and 1
        lambdas: Interpolation weights (trigram, bigram, unigram)
        k: Additive smoothing constant, strictly positive
    """
    discount: float = 0.7
    lambdas: Tuple[float, float, float] = (0.1, 0.5, 0.4)
    k: float = 1.0

    def __post_init__(self):
        if not 0.0 < self.discount < 1.0:
            raise ConfigurationError(
                f"discount must be in (0, 1), got {self.discount}")
        if not self.k > 0:
            raise ConfigurationError(f"k must be positive, got {self.k}")

        lambdas = tuple(float(x) for x in self.lambdas)
        if len(lambdas) != 3:
            raise ConfigurationError(
                f"expected 3 interpolation weights, got {len(lambdas)}")
        if any(x < 0 for x in lambdas):
            raise ConfigurationError(
                f"interpolation weights must be non-negative, got {lambdas}")
        object.__setattr__(self, 'lambdas', lambdas)

        if not math.isclose(sum(lambdas), 1.0, abs_tol=1e-9):
            logger.warning("Interpolation weights %s sum to %.6f, not 1",
                           lambdas, sum(lambdas))


@dataclass(frozen=True)
class SplitConfig:
    """Proportions of a corpus assigned to the train/dev/test partitions."""
    train: float = 0.90
    dev: float = 0.05
    test: float = 0.05

    def __post_init__(self):
        for name in ('train', 'dev', 'test'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    f"{name} proportion must be in [0, 1], got {value}")
        if self.train + self.dev + self.test > 1.0 + SPLIT_TOLERANCE:
            raise ConfigurationError(
                f"split proportions sum to {self.train + self.dev + self.test}, "
                "must not exceed 1")
