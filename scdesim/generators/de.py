"""Per-sample mean derivation and signal-gene injection."""

import logging
from typing import Sequence

import numpy as np
import pandas as pd
from numpy.random import Generator

from ..config import ConfigurationError, SampleSpec

logger = logging.getLogger(__name__)


def select_signal_genes(rng: Generator, ngenes: int, ndiff: int) -> np.ndarray:
    """Choose the signal-gene positions uniformly without replacement.

    Args:
        rng: NumPy random generator.
        ngenes: Size of the gene pool.
        ndiff: Number of signal genes.

    Returns:
        Integer positions into the gene pool.

    Raises:
        ConfigurationError: If ndiff exceeds ngenes.
    """
    if ndiff > ngenes:
        raise ConfigurationError(
            f"Cannot select {ndiff} signal genes from {ngenes} genes"
        )
    return rng.choice(ngenes, size=ndiff, replace=False)


def adjust_sample_means(
    rng: Generator,
    baseline: pd.Series,
    noise_sd: float,
) -> pd.Series:
    """Apply independent multiplicative noise to the baseline means.

    adjusted = baseline + baseline * noise, with noise ~ N(0, noise_sd).
    """
    noise = rng.normal(loc=0.0, scale=noise_sd, size=len(baseline))
    return baseline + baseline * noise


def inject_signal(
    rng: Generator,
    means: pd.Series,
    signal_idx: np.ndarray,
    diff_mean: float,
    diff_sd: float,
) -> pd.Series:
    """Overwrite the signal genes with draws from the elevated regime.

    Args:
        rng: NumPy random generator.
        means: Adjusted mean expression for one sample.
        signal_idx: Positions of the signal genes.
        diff_mean: Mean of the elevated normal distribution.
        diff_sd: Standard deviation of the elevated normal distribution.

    Returns:
        A copy of means with the signal positions replaced.
    """
    elevated = rng.normal(loc=diff_mean, scale=diff_sd, size=len(signal_idx))
    updated = means.copy()
    updated.iloc[signal_idx] = elevated
    return updated


def design_sample_means(
    rng: Generator,
    baseline: pd.Series,
    samples: Sequence[SampleSpec],
    signal_sample: str,
    ndiff: int,
    noise_sd: float,
    diff_mean: float,
    diff_sd: float,
) -> tuple[dict[str, pd.Series], np.ndarray]:
    """Derive the mean-expression vector of every sample.

    Every sample gets the same noise step. Only signal_sample additionally
    has ndiff genes moved to the elevated regime, so the injected genes are
    the one systematic difference between samples.

    Args:
        rng: NumPy random generator.
        baseline: Shared baseline means indexed by gene.
        samples: Samples in simulation order.
        signal_sample: sample_id that receives the signal.
        ndiff: Number of signal genes.
        noise_sd: Standard deviation of the multiplicative noise.
        diff_mean: Mean of the elevated regime.
        diff_sd: Standard deviation of the elevated regime.

    Returns:
        Tuple of (sample_id -> mean Series, signal-gene positions).

    Raises:
        ConfigurationError: If signal_sample is not among samples.
    """
    if signal_sample not in {s.sample_id for s in samples}:
        raise ConfigurationError(f"Unknown signal sample {signal_sample!r}")

    sample_means = {}
    signal_idx = None
    for sample in samples:
        means = adjust_sample_means(rng, baseline, noise_sd)
        if sample.sample_id == signal_sample:
            logger.debug(f"Injecting {ndiff} signal genes into {sample.sample_id}")
            signal_idx = select_signal_genes(rng, len(baseline), ndiff)
            means = inject_signal(rng, means, signal_idx, diff_mean, diff_sd)
        means.name = sample.sample_id
        sample_means[sample.sample_id] = means

    return sample_means, signal_idx
