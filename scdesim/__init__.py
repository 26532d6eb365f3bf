"""Single-cell count simulator with ground-truth DE genes for benchmarking DE methods."""

from .config import ConfigurationError, SampleSpec, SimulationConfig
from .scoring import GeneScore, RankedGene, rank_signal_genes
from .simulator import DESim

__all__ = [
    "ConfigurationError",
    "DESim",
    "GeneScore",
    "RankedGene",
    "SampleSpec",
    "SimulationConfig",
    "rank_signal_genes",
]
