import itertools

import pytest

from trigram_lm import (
    BackoffEstimator, InterpolationEstimator, ModelConfig, SmoothingMethod,
    get_estimator,
)
from trigram_lm.tables import FrequencyTables


@pytest.fixture
def backoff(abc_tables):
    return BackoffEstimator(abc_tables, ModelConfig(discount=0.5, k=1.0))


@pytest.fixture
def interpolation(cat_tables):
    return InterpolationEstimator(cat_tables, ModelConfig(lambdas=(0.1, 0.5, 0.4), k=1.0))


def all_pairs(tables):
    words = sorted(tables.vocabulary) + ["<unseen>"]
    for w2, w1, w in itertools.product(words, repeat=3):
        yield (w2, w1), w


class TestBackoff:

    def test_trigram_hit(self, backoff):
        # D * c(a,b,c) / (c(a,b) + K) = 0.5 * 1 / 3
        assert backoff.estimate(("a", "b"), "c") == pytest.approx(1 / 6)

    def test_bigram_hit_redistributes_leftover_mass(self, backoff):
        # alpha(x,b) = 1 - 0.5 * 1 / (1 + 1) = 0.75
        # denominator: bigram continuations of b not seen after (x,b) -> d:1
        assert backoff.trigram_leftover(("x", "b")) == pytest.approx(0.75)
        assert backoff.estimate(("x", "b"), "d") == pytest.approx(0.5 * 0.75 * 1 / 2)

    def test_bigram_hit_without_trigram_history(self, backoff):
        # (d, x) was never seen, so alpha is 1 and x's continuations all count
        assert backoff.trigram_leftover(("d", "x")) == 1.0
        assert backoff.estimate(("d", "x"), "b") == pytest.approx(0.5 * 1 / 2)

    def test_unigram_fallback(self, backoff):
        # alpha'(b) = 1 - 0.5 * 3 / (3 + 1) = 0.625
        # denominator: 18 tokens minus c:2 and d:1 = 15
        assert backoff.bigram_leftover("b") == pytest.approx(0.625)
        assert backoff.estimate(("a", "b"), "a") == pytest.approx(0.5 * 0.625 * 2 / 16)

    def test_out_of_vocabulary_floor(self, backoff):
        assert backoff.estimate(("a", "b"), "zebra") == pytest.approx(0.5 * 0.625 * 1 / 16)

    def test_unknown_history(self, backoff):
        assert backoff.bigram_leftover("zz") == 1.0
        assert backoff.estimate(("yy", "zz"), "b") == pytest.approx(0.5 * 3 / 19)

    def test_missing_trigram_normalizer_reads_as_zero(self):
        tables = FrequencyTables(
            unigram={"a": 1, "b": 1, "c": 1},
            bigram={},
            trigram={("a", "b"): {"c": 1}},
        )
        estimator = BackoffEstimator(tables, ModelConfig(discount=0.5, k=1.0))
        assert estimator.estimate(("a", "b"), "c") == pytest.approx(0.5)

    def test_leftover_mass_in_unit_interval(self, abc_tables):
        estimator = BackoffEstimator(abc_tables, ModelConfig(discount=0.9))
        words = sorted(abc_tables.vocabulary) + ["<unseen>"]
        for w2, w1 in itertools.product(words, repeat=2):
            assert 0.0 <= estimator.trigram_leftover((w2, w1)) <= 1.0
            assert 0.0 <= estimator.bigram_leftover(w1) <= 1.0

    @pytest.mark.parametrize("discount", [0.1, 0.5, 0.7, 0.99])
    def test_probabilities_in_range(self, abc_tables, cat_tables, discount):
        for tables in (abc_tables, cat_tables):
            estimator = BackoffEstimator(tables, ModelConfig(discount=discount))
            for history, word in all_pairs(tables):
                p = estimator.estimate(history, word)
                assert 0.0 < p <= 1.0

    def test_cached_levels_do_not_change_results(self, backoff):
        first = backoff.estimate(("x", "b"), "d")
        backoff.estimate(("a", "b"), "x")
        assert backoff.estimate(("x", "b"), "d") == first


class TestInterpolation:

    def test_all_three_orders(self, interpolation):
        # 0.1 * 2/2 + 0.5 * 2/(4 + 1) + 0.4 * 2/(12 + 1)
        expected = 0.1 + 0.2 + 0.8 / 13
        assert interpolation.estimate(("<s>", "<s>"), "the") == pytest.approx(expected)

    def test_unknown_history_uses_unigram_only(self, interpolation):
        assert interpolation.estimate(("q", "r"), "cat") == pytest.approx(0.4 / 13)

    def test_out_of_vocabulary_floor(self, interpolation):
        assert interpolation.estimate(("the", "cat"), "zebra", 100) == pytest.approx(1 / 101)

    def test_floor_is_not_weighted(self, cat_tables):
        estimator = InterpolationEstimator(
            cat_tables, ModelConfig(lambdas=(0.2, 0.2, 0.6), k=2.0),
            total_token_count=98)
        assert estimator.estimate(("the", "cat"), "zebra") == pytest.approx(2 / 100)

    def test_total_token_count_defaults_to_training_total(self, interpolation):
        assert interpolation.total_token_count == 12
        assert interpolation.estimate(("a", "b"), "zebra") == pytest.approx(1 / 13)

    def test_missing_trigram_normalizer_drops_trigram_term(self):
        tables = FrequencyTables(
            unigram={"a": 1, "b": 1, "c": 1},
            bigram={},
            trigram={("a", "b"): {"c": 1}},
        )
        estimator = InterpolationEstimator(tables)
        assert estimator.estimate(("a", "b"), "c") == pytest.approx(0.4 * 1 / 4)

    def test_probabilities_in_range(self, abc_tables, cat_tables):
        for tables in (abc_tables, cat_tables):
            estimator = InterpolationEstimator(tables)
            for history, word in all_pairs(tables):
                p = estimator.estimate(history, word)
                assert 0.0 < p <= 1.0


def test_get_estimator_accepts_enum_or_name(cat_tables):
    assert isinstance(get_estimator(SmoothingMethod.BACKOFF, cat_tables), BackoffEstimator)
    assert isinstance(get_estimator("interpolation", cat_tables), InterpolationEstimator)
    with pytest.raises(ValueError):
        get_estimator("kneser_ney", cat_tables)
