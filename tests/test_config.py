import logging

import pytest

from trigram_lm import ConfigurationError, ModelConfig, SplitConfig


def test_defaults():
    config = ModelConfig()
    assert config.discount == 0.7
    assert config.lambdas == (0.1, 0.5, 0.4)
    assert config.k == 1.0

    split = SplitConfig()
    assert (split.train, split.dev, split.test) == (0.90, 0.05, 0.05)


@pytest.mark.parametrize("kwargs", [
    {"discount": 0.0},
    {"discount": 1.0},
    {"discount": -0.3},
    {"k": 0},
    {"k": -1.0},
    {"lambdas": (0.5, 0.5)},
    {"lambdas": (-0.1, 0.6, 0.5)},
])
def test_invalid_model_config(kwargs):
    with pytest.raises(ConfigurationError):
        ModelConfig(**kwargs)


def test_lambdas_are_stored_as_float_tuple():
    config = ModelConfig(lambdas=[0, 1, 0])
    assert config.lambdas == (0.0, 1.0, 0.0)


def test_lambdas_not_summing_to_one_only_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="trigram_lm.config"):
        config = ModelConfig(lambdas=(0.5, 0.5, 0.5))
    assert config.lambdas == (0.5, 0.5, 0.5)
    assert "sum to" in caplog.text


@pytest.mark.parametrize("proportions", [
    (0.9, 0.2, 0.05),
    (1.1, 0.0, 0.0),
    (0.9, -0.05, 0.15),
])
def test_invalid_split(proportions):
    with pytest.raises(ConfigurationError):
        SplitConfig(*proportions)


def test_split_below_one_is_allowed():
    split = SplitConfig(0.5, 0.1, 0.1)
    assert split.train == 0.5


def test_config_is_frozen():
    config = ModelConfig()
    with pytest.raises(AttributeError):
        config.discount = 0.5
