import numpy as np
import pandas as pd
import pytest

from scdesim import ConfigurationError, SampleSpec
from scdesim.generators import (
    CellId,
    assign_pseudobulks,
    build_sample_metadata,
    make_cell_ids,
)


def test_cell_id_label():
    assert CellId("male_disease_", 3).label == "male_disease_3"
    assert [c.label for c in make_cell_ids("t", 3)] == ["t1", "t2", "t3"]


def test_pseudobulks_are_equal_size(rng):
    labels = assign_pseudobulks(rng, 500, 10)
    counts = pd.Series(labels).value_counts()
    assert len(counts) == 10
    assert (counts == 50).all()


def test_pseudobulks_are_permuted(rng):
    labels = assign_pseudobulks(rng, 100, 4)
    positional = np.repeat(["pb1", "pb2", "pb3", "pb4"], 25)
    assert not np.array_equal(labels, positional)


def test_pseudobulks_require_divisible_counts(rng):
    with pytest.raises(ConfigurationError, match="divisible"):
        assign_pseudobulks(rng, 10, 3)


def test_sample_metadata_rows():
    sample = SampleSpec("sample_2", "female", "disease", "fd_")
    cells = make_cell_ids("fd_", 4)
    meta = build_sample_metadata(sample, cells, ["pb1", "pb2", "pb2", "pb1"])
    assert meta.index.tolist() == ["fd_1", "fd_2", "fd_3", "fd_4"]
    assert set(meta["sex"]) == {"female"}
    assert set(meta["pathology"]) == {"disease"}
    assert meta["pseudobulk"].tolist() == ["pb1", "pb2", "pb2", "pb1"]
