"""Shared fixtures for scdesim tests."""

import numpy as np
import pytest

from scdesim import SimulationConfig


@pytest.fixture
def rng():
    """Seeded random number generator for reproducibility."""
    return np.random.default_rng(42)


@pytest.fixture
def small_config():
    """Four samples of 20 cells, 60 genes, 6 signal genes."""
    return SimulationConfig(
        n_cells=20,
        n_genes=60,
        n_diff_genes=6,
        n_pseudobulks=4,
        seed=7,
    )
