"""
Trigram Language Model Package

Unigram/bigram/trigram frequency tables with discounted back-off and
linear interpolation smoothing, evaluated by perplexity.
"""

from .config import ModelConfig, SplitConfig
from .errors import ConfigurationError, DataError, TrigramLMError
from .tables import FrequencyTables, train
from .smoothing import (
    SmoothingMethod, BackoffEstimator, InterpolationEstimator, get_estimator
)
from .evaluation import perplexity, perplexity_backoff, perplexity_interpolation
from .model import LanguageModel
from .corpus import load_corpus, load_brown_corpus, preprocess_text

__version__ = "0.1.0"
__all__ = [
    "ModelConfig", "SplitConfig",
    "ConfigurationError", "DataError", "TrigramLMError",
    "FrequencyTables", "train",
    "SmoothingMethod", "BackoffEstimator", "InterpolationEstimator", "get_estimator",
    "perplexity", "perplexity_backoff", "perplexity_interpolation",
    "LanguageModel",
    "load_corpus", "load_brown_corpus", "preprocess_text",
]
