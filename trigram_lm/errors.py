"""
Exceptions raised by the trigram language model.

Gaps in the frequency tables and zero probabilities are handled inside the
estimators and never surface here.
"""


class TrigramLMError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(TrigramLMError, ValueError):
    """Invalid parameters, split proportions or corpus paths."""


class DataError(TrigramLMError, ValueError):
    """Input data that cannot be trained on or evaluated."""
