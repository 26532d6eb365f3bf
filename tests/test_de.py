import numpy as np
import pandas as pd
import pytest

from scdesim import ConfigurationError
from scdesim.config import DEFAULT_SAMPLES
from scdesim.generators import (
    adjust_sample_means,
    design_sample_means,
    inject_signal,
    select_signal_genes,
    simulate_baseline_means,
)


@pytest.fixture
def baseline():
    genes = [f"g{i}" for i in range(50)]
    return pd.Series(np.linspace(1.0, 5.0, 50), index=genes)


def test_select_signal_genes_unique(rng):
    idx = select_signal_genes(rng, 200, 40)
    assert len(idx) == 40
    assert len(set(idx.tolist())) == 40
    assert idx.min() >= 0 and idx.max() < 200


def test_select_signal_genes_too_many(rng):
    with pytest.raises(ConfigurationError):
        select_signal_genes(rng, 10, 11)


def test_baseline_means_indexed_by_gene(rng):
    means = simulate_baseline_means(rng, ["a", "b", "c"], mean=2.0, sd=1.0)
    assert means.index.tolist() == ["a", "b", "c"]


def test_noise_is_multiplicative(rng, baseline):
    assert adjust_sample_means(rng, baseline, 0.0).equals(baseline)
    noisy = adjust_sample_means(rng, baseline, 0.1)
    ratio = noisy / baseline - 1
    assert ratio.abs().max() < 0.6
    assert not noisy.equals(baseline)


def test_inject_signal_only_touches_signal_genes(rng, baseline):
    idx = np.array([0, 10, 20])
    updated = inject_signal(rng, baseline, idx, diff_mean=100.0, diff_sd=0.0)
    assert (updated.iloc[idx] == 100.0).all()
    mask = np.ones(len(baseline), dtype=bool)
    mask[idx] = False
    assert updated[mask].equals(baseline[mask])
    # original left untouched
    assert baseline.iloc[0] == 1.0


def test_design_only_signal_sample_differs(rng, baseline):
    means, idx = design_sample_means(
        rng,
        baseline,
        DEFAULT_SAMPLES,
        signal_sample="sample_4",
        ndiff=5,
        noise_sd=0.0,
        diff_mean=50.0,
        diff_sd=0.0,
    )
    assert list(means) == ["sample_1", "sample_2", "sample_3", "sample_4"]
    for sample_id in ("sample_1", "sample_2", "sample_3"):
        assert np.allclose(means[sample_id], baseline)
    assert len(idx) == 5
    assert (means["sample_4"].iloc[idx] == 50.0).all()
    changed = np.flatnonzero(~np.isclose(means["sample_4"], baseline))
    assert sorted(changed.tolist()) == sorted(idx.tolist())


def test_design_unknown_signal_sample(rng, baseline):
    with pytest.raises(ConfigurationError):
        design_sample_means(rng, baseline, DEFAULT_SAMPLES, "sample_9", 5, 0.1, 5.0, 1.0)
