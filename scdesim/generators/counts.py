"""Negative binomial count generation for simulated samples."""

import logging
from typing import Sequence

import numpy as np
import pandas as pd
from numpy.random import Generator

from ..config import ConfigurationError
from .cells import make_cell_ids

logger = logging.getLogger(__name__)


def get_neg_binomial(
    rng: Generator,
    mu: float,
    n: int,
    size: float = 5.0,
) -> np.ndarray:
    """Draw one gene's counts across cells.

    Counts follow a negative binomial with mean mu and shape size, so the
    variance is mu + mu**2 / size.

    Args:
        rng: NumPy random generator.
        mu: Target mean, non-negative.
        n: Number of draws (cells).
        size: Negative binomial shape parameter.

    Returns:
        Integer array of length n.
    """
    if mu < 0:
        raise ValueError(f"mu must be non-negative, got {mu}")
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    if mu == 0:
        return np.zeros(n, dtype=np.int64)

    vals = rng.negative_binomial(n=size, p=size / (size + mu), size=n)
    return np.rint(vals).astype(np.int64)


def init_count_matrix(
    rng: Generator,
    ncells: int,
    cell_tag: str,
    genes: Sequence[str],
    mu_expression: Sequence[float],
    size: float = 5.0,
) -> pd.DataFrame:
    """Build the gene x cell count matrix of one sample.

    Args:
        rng: NumPy random generator.
        ncells: Number of cells in the sample.
        cell_tag: Prefix for the cell labels.
        genes: Gene identifiers, used as row labels.
        mu_expression: Mean expression per gene, aligned with genes.
        size: Negative binomial shape parameter.

    Returns:
        DataFrame of int64 counts, genes as rows and cells as columns.

    Raises:
        ConfigurationError: If genes and mu_expression differ in length.
    """
    if len(genes) != len(mu_expression):
        raise ConfigurationError(
            f"Size of genes ({len(genes)}) does not match size of "
            f"mu_expression ({len(mu_expression)})"
        )

    # Noise can push near-zero baselines below zero
    mu = np.clip(np.asarray(mu_expression, dtype=float), 0.0, None)

    cellnames = [cell.label for cell in make_cell_ids(cell_tag, ncells)]
    logger.debug(f"Drawing counts for {len(genes)} genes x {ncells} cells ({cell_tag})")
    mat = np.empty((len(genes), ncells), dtype=np.int64)
    for i, gene_mu in enumerate(mu):
        mat[i, :] = get_neg_binomial(rng, gene_mu, ncells, size=size)

    return pd.DataFrame(mat, index=list(genes), columns=cellnames)
