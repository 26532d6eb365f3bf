"""Assemble per-sample matrices into one count matrix with aligned metadata."""

import logging
from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from .config import ConfigurationError, SampleSpec
from .generators.cells import METADATA_COLUMNS, CellId, build_sample_metadata

logger = logging.getLogger(__name__)


@dataclass
class SampleData:
    """Simulated output for one sample.

    Attributes:
        sample: The sample's design entry.
        counts: Gene x cell count matrix.
        cells: Cell identifiers, in the matrix's column order.
        pseudobulks: Pseudobulk label per cell, aligned with cells.
    """

    sample: SampleSpec
    counts: pd.DataFrame
    cells: list[CellId]
    pseudobulks: Sequence[str]


def check_alignment(counts: pd.DataFrame, metadata: pd.DataFrame) -> None:
    """Raise ConfigurationError unless metadata rows match matrix columns one to one."""
    if not metadata.index.equals(counts.columns):
        raise ConfigurationError(
            "Metadata row labels do not match count matrix column labels"
        )


def combine_samples(samples: Sequence[SampleData]) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Concatenate sample matrices column-wise and build the metadata table.

    Args:
        samples: Per-sample outputs in the desired column order.

    Returns:
        Tuple of (combined gene x cell counts, per-cell metadata).

    Raises:
        ConfigurationError: If gene rows differ between samples, cell labels
            collide, or a sample's cells disagree with its matrix columns.
    """
    if not samples:
        raise ConfigurationError("No samples to combine")

    genes = samples[0].counts.index
    frames = []
    for data in samples:
        if not data.counts.index.equals(genes):
            raise ConfigurationError(
                f"Gene rows of {data.sample.sample_id} do not match "
                f"{samples[0].sample.sample_id}"
            )
        metadata = build_sample_metadata(data.sample, data.cells, data.pseudobulks)
        check_alignment(data.counts, metadata)
        frames.append(metadata)

    counts = pd.concat([data.counts for data in samples], axis=1)
    if counts.columns.has_duplicates:
        dupes = counts.columns[counts.columns.duplicated()].unique().tolist()
        raise ConfigurationError(f"Duplicate cell labels across samples: {dupes[:5]}")

    metadata = pd.concat(frames, axis=0)[METADATA_COLUMNS].astype(
        {col: "category" for col in METADATA_COLUMNS}
    )
    check_alignment(counts, metadata)

    logger.debug(
        f"Combined {len(samples)} samples into {counts.shape[0]} genes x "
        f"{counts.shape[1]} cells"
    )
    return counts, metadata
