"""Cell identifiers, pseudobulk assignment and per-cell metadata."""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd
from numpy.random import Generator

from ..config import ConfigurationError, SampleSpec

METADATA_COLUMNS = ["sample", "sex", "pathology", "pseudobulk"]


@dataclass(frozen=True)
class CellId:
    """Identity of one simulated cell.

    The label is used both as the count-matrix column label and as the
    metadata row label.
    """

    tag: str
    index: int

    @property
    def label(self) -> str:
        return f"{self.tag}{self.index}"


def make_cell_ids(cell_tag: str, ncells: int) -> list[CellId]:
    """Cell identifiers for one sample, indexed from 1."""
    return [CellId(cell_tag, i) for i in range(1, ncells + 1)]


def assign_pseudobulks(
    rng: Generator,
    ncells: int,
    npseudobulks: int,
) -> np.ndarray:
    """Randomly partition a sample's cells into equal-size pseudobulk groups.

    Args:
        rng: NumPy random generator.
        ncells: Number of cells in the sample.
        npseudobulks: Number of groups.

    Returns:
        Array of labels "pb1".."pbK", each appearing ncells / npseudobulks times.

    Raises:
        ConfigurationError: If ncells is not divisible by npseudobulks.
    """
    if npseudobulks <= 0 or ncells % npseudobulks != 0:
        raise ConfigurationError(
            f"ncells ({ncells}) must be divisible by npseudobulks ({npseudobulks})"
        )
    labels = np.repeat(
        [f"pb{k}" for k in range(1, npseudobulks + 1)],
        ncells // npseudobulks,
    )
    return rng.permutation(labels)


def build_sample_metadata(
    sample: SampleSpec,
    cells: Sequence[CellId],
    pseudobulks: Sequence[str],
) -> pd.DataFrame:
    """Metadata rows of one sample, indexed by cell label."""
    if len(cells) != len(pseudobulks):
        raise ConfigurationError(
            f"{len(cells)} cells but {len(pseudobulks)} pseudobulk labels "
            f"for {sample.sample_id}"
        )
    ncells = len(cells)
    return pd.DataFrame(
        {
            "sample": [sample.sample_id] * ncells,
            "sex": [sample.sex] * ncells,
            "pathology": [sample.pathology] * ncells,
            "pseudobulk": list(pseudobulks),
        },
        index=pd.Index([cell.label for cell in cells]),
    )
