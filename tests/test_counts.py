import numpy as np
import pytest

from scdesim import ConfigurationError
from scdesim.generators import get_neg_binomial, init_count_matrix


def test_neg_binomial_returns_n_nonnegative_ints(rng):
    for mu in (0.1, 1.0, 7.5, 40.0):
        vals = get_neg_binomial(rng, mu, 50)
        assert vals.shape == (50,)
        assert vals.dtype == np.int64
        assert np.all(vals >= 0)


def test_neg_binomial_zero_mean_is_all_zero(rng):
    vals = get_neg_binomial(rng, 0.0, 25)
    assert vals.shape == (25,)
    assert np.all(vals == 0)


def test_neg_binomial_is_overdispersed(rng):
    # mean 10, size 5 -> variance 10 + 100 / 5 = 30
    vals = get_neg_binomial(rng, 10.0, 20000, size=5.0)
    assert abs(vals.mean() - 10.0) < 0.5
    assert vals.var() > 1.5 * vals.mean()


def test_neg_binomial_rejects_bad_parameters(rng):
    with pytest.raises(ValueError):
        get_neg_binomial(rng, -1.0, 10)
    with pytest.raises(ValueError):
        get_neg_binomial(rng, 1.0, 10, size=0)


def test_count_matrix_shape_and_labels(rng):
    genes = ["A", "B", "C"]
    counts = init_count_matrix(rng, 4, "s1_", genes, [1.0, 2.0, 3.0])
    assert counts.shape == (3, 4)
    assert counts.index.tolist() == genes
    assert counts.columns.tolist() == ["s1_1", "s1_2", "s1_3", "s1_4"]
    assert (counts.to_numpy() >= 0).all()


def test_count_matrix_length_mismatch_fails(rng):
    with pytest.raises(ConfigurationError, match="does not match"):
        init_count_matrix(rng, 4, "s1_", ["A", "B"], [1.0, 2.0, 3.0])


def test_count_matrix_clamps_negative_means(rng):
    mu = np.array([-0.5, 0.0, 3.0])
    counts = init_count_matrix(rng, 30, "x", ["A", "B", "C"], mu)
    assert (counts.loc["A"] == 0).all()
    assert (counts.loc["B"] == 0).all()
    # input vector is left untouched
    assert mu[0] == -0.5
