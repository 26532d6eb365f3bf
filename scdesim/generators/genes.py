"""Gene pool and baseline expression generation."""

import logging
from pathlib import Path
from typing import Sequence, Union

import numpy as np
import pandas as pd
from numpy.random import Generator

from ..config import ConfigurationError

logger = logging.getLogger(__name__)


def check_gene_universe(genes: Sequence[str], source: str = "gene universe") -> None:
    """Raise ConfigurationError if genes is empty or repeats a symbol."""
    if len(genes) == 0:
        raise ConfigurationError(f"No gene symbols found in {source}")
    duplicated = pd.Index(genes).duplicated()
    if duplicated.any():
        dupes = sorted(set(np.asarray(genes, dtype=object)[duplicated]))
        raise ConfigurationError(f"Duplicate gene symbols in {source}: {dupes[:5]}")


def read_gene_universe(path: Union[str, Path]) -> list[str]:
    """Read a newline-delimited list of gene symbols.

    The file has one column and no header. Blank lines are skipped and
    surrounding whitespace is stripped.

    Args:
        path: Path to the gene list file.

    Returns:
        Gene symbols in file order.

    Raises:
        ConfigurationError: If the file holds no genes or repeats a symbol.
    """
    with open(path) as handle:
        genes = [line.strip() for line in handle if line.strip()]

    check_gene_universe(genes, source=str(path))
    logger.debug(f"Read {len(genes)} gene symbols from {path}")
    return genes


def synthetic_gene_universe(ngenes: int) -> list[str]:
    """Gene names used when no gene list file is configured."""
    return [f"Gene{i}" for i in range(1, ngenes + 1)]


def sample_gene_pool(
    rng: Generator,
    universe: Sequence[str],
    ngenes: int,
) -> list[str]:
    """Sample the run's gene pool without replacement.

    Args:
        rng: NumPy random generator.
        universe: All available gene symbols.
        ngenes: Number of genes to keep.

    Returns:
        Ordered list of unique gene identifiers.

    Raises:
        ConfigurationError: If the universe is empty or repeats a symbol, or
            if more genes are requested than it holds.
    """
    check_gene_universe(universe)
    if ngenes > len(universe):
        raise ConfigurationError(
            f"Cannot sample {ngenes} genes from a universe of {len(universe)}"
        )
    genes = rng.choice(np.asarray(universe, dtype=object), size=ngenes, replace=False)
    return [str(g) for g in genes]


def simulate_baseline_means(
    rng: Generator,
    genes: Sequence[str],
    mean: float,
    sd: float,
) -> pd.Series:
    """Draw the shared baseline mean expression, one normal draw per gene.

    Args:
        rng: NumPy random generator.
        genes: Gene identifiers, in pool order.
        mean: Mean of the normal distribution.
        sd: Standard deviation of the normal distribution.

    Returns:
        Series of baseline means indexed by gene.
    """
    baseline = rng.normal(loc=mean, scale=sd, size=len(genes))
    return pd.Series(baseline, index=list(genes), name="baseline_mean")
