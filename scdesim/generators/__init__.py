"""Generator modules for the DE benchmark simulation."""

from .cells import CellId, assign_pseudobulks, build_sample_metadata, make_cell_ids
from .counts import get_neg_binomial, init_count_matrix
from .de import (
    adjust_sample_means,
    design_sample_means,
    inject_signal,
    select_signal_genes,
)
from .genes import (
    check_gene_universe,
    read_gene_universe,
    sample_gene_pool,
    simulate_baseline_means,
    synthetic_gene_universe,
)

__all__ = [
    "CellId",
    "adjust_sample_means",
    "assign_pseudobulks",
    "build_sample_metadata",
    "check_gene_universe",
    "design_sample_means",
    "get_neg_binomial",
    "init_count_matrix",
    "inject_signal",
    "make_cell_ids",
    "read_gene_universe",
    "sample_gene_pool",
    "select_signal_genes",
    "simulate_baseline_means",
    "synthetic_gene_universe",
]
