import pytest

from trigram_lm import train

from .utils import mark


@pytest.fixture
def cat_sentences():
    return [mark("the cat sat"), mark("the dog sat")]


@pytest.fixture
def cat_tables(cat_sentences):
    return train(cat_sentences)


@pytest.fixture
def abc_sentences():
    return [mark("a b c"), mark("a b d"), mark("x b c")]


@pytest.fixture
def abc_tables(abc_sentences):
    return train(abc_sentences)
