"""Sex x pathology single-cell simulator with injected ground-truth DE genes."""

import logging
from typing import TYPE_CHECKING, Optional, Self, Sequence

import numpy as np
import pandas as pd
from numpy.random import Generator

from .assembly import SampleData, combine_samples
from .config import SimulationConfig
from .exporters import to_anndata
from .generators import (
    assign_pseudobulks,
    design_sample_means,
    init_count_matrix,
    make_cell_ids,
    read_gene_universe,
    sample_gene_pool,
    simulate_baseline_means,
    synthetic_gene_universe,
)

if TYPE_CHECKING:
    import anndata

# Configure module logger
logger = logging.getLogger(__name__)


class DESim:
    """Simulate a four-sample single-cell experiment with known DE genes.

    The design crosses sex (female/male) with pathology (control/disease).
    Every sample shares one baseline mean per gene, perturbed by its own
    multiplicative noise. Only the signal sample gets n_diff_genes genes
    moved to an elevated regime, and those genes are the ground truth used
    to score DE methods.

    Example:
        >>> config = SimulationConfig(n_cells=100, n_genes=500, n_diff_genes=20)
        >>> sim = DESim(config).simulate()
        >>> sim.counts.shape  # genes x cells
        (500, 400)
    """

    def __init__(
        self,
        config: SimulationConfig,
        gene_universe: Optional[Sequence[str]] = None,
        rng: Optional[Generator] = None,
    ) -> None:
        """Initialize the simulator.

        Args:
            config: SimulationConfig object with all parameters.
            gene_universe: Gene symbols to sample from. Overrides
                config.gene_list_path when given.
            rng: Random stream shared by every simulation step. Built from
                config.seed if None.
        """
        self.config = config

        if gene_universe is not None:
            self._universe = list(gene_universe)
        elif config.gene_list_path is not None:
            self._universe = read_gene_universe(config.gene_list_path)
        else:
            self._universe = synthetic_gene_universe(config.n_genes)

        self._rng: Generator = rng if rng is not None else np.random.default_rng(config.seed)

        # Populated by simulate()
        self.genes: list[str]
        self.baseline: pd.Series
        self.sample_means: dict[str, pd.Series]
        self.signal_idx: np.ndarray
        self.samples: list[SampleData]
        self._counts: Optional[pd.DataFrame] = None
        self._metadata: Optional[pd.DataFrame] = None
        self._ground_truth: Optional[pd.Series] = None

    def simulate(self) -> Self:
        """Run the full simulation pipeline.

        Random draws happen in this order:
        1. Sample the gene pool from the universe
        2. Draw baseline means
        3. Derive per-sample means (noise, then the signal override)
        4. Draw counts, sample by sample and gene by gene
        5. Permute pseudobulk labels, sample by sample

        Returns:
            Self for method chaining.
        """
        cfg = self.config

        logger.info("Sampling gene pool")
        self.genes = sample_gene_pool(self._rng, self._universe, cfg.n_genes)

        logger.info("Simulating baseline means")
        self.baseline = simulate_baseline_means(
            rng=self._rng,
            genes=self.genes,
            mean=cfg.baseline_mean,
            sd=cfg.baseline_sd,
        )

        logger.info("Designing sample means")
        self.sample_means, self.signal_idx = design_sample_means(
            rng=self._rng,
            baseline=self.baseline,
            samples=cfg.samples,
            signal_sample=cfg.signal_sample,
            ndiff=cfg.n_diff_genes,
            noise_sd=cfg.noise_sd,
            diff_mean=cfg.diff_mean,
            diff_sd=cfg.diff_sd,
        )

        logger.info("Simulating counts")
        sample_counts = [
            init_count_matrix(
                rng=self._rng,
                ncells=cfg.n_cells,
                cell_tag=sample.cell_tag,
                genes=self.genes,
                mu_expression=self.sample_means[sample.sample_id].to_numpy(),
                size=cfg.nb_size,
            )
            for sample in cfg.samples
        ]

        logger.info("Assigning pseudobulks")
        self.samples = [
            SampleData(
                sample=sample,
                counts=counts,
                cells=make_cell_ids(sample.cell_tag, cfg.n_cells),
                pseudobulks=assign_pseudobulks(self._rng, cfg.n_cells, cfg.n_pseudobulks),
            )
            for sample, counts in zip(cfg.samples, sample_counts)
        ]

        logger.info("Assembling count matrix and metadata")
        self._counts, self._metadata = combine_samples(self.samples)

        is_diff = np.zeros(len(self.genes), dtype=bool)
        is_diff[self.signal_idx] = True
        self._ground_truth = pd.Series(is_diff, index=self.genes, name="is_diff")

        logger.info(
            f"Simulated {self._counts.shape[0]} genes x {self._counts.shape[1]} cells "
            f"with {int(is_diff.sum())} signal genes in {cfg.signal_sample}"
        )
        return self

    def _require_simulated(self) -> None:
        if self._counts is None:
            raise ValueError("Must call simulate() first")

    @property
    def counts(self) -> pd.DataFrame:
        """Combined gene x cell count matrix."""
        self._require_simulated()
        return self._counts

    @property
    def metadata(self) -> pd.DataFrame:
        """Per-cell metadata aligned with the columns of counts."""
        self._require_simulated()
        return self._metadata

    @property
    def ground_truth(self) -> pd.Series:
        """Boolean is_diff indicator indexed by gene."""
        self._require_simulated()
        return self._ground_truth

    @property
    def signal_genes(self) -> list[str]:
        """Identifiers of the injected signal genes, in gene-pool order."""
        return self.ground_truth.index[self.ground_truth].tolist()

    def gene_params(self) -> pd.DataFrame:
        """Per-gene table of baseline mean, per-sample means and is_diff."""
        self._require_simulated()
        params = pd.DataFrame({"baseline_mean": self.baseline})
        for sample_id, means in self.sample_means.items():
            params[f"{sample_id}_mean"] = means
        params["is_diff"] = self._ground_truth
        return params

    def to_anndata(self) -> "anndata.AnnData":
        """Export simulation results to an AnnData object.

        Requires the `anndata` package to be installed.
        Install with: `pip install scdesim[anndata]`

        Returns:
            AnnData object with:
            - X: count matrix (cells x genes)
            - obs: per-cell metadata
            - var: gene parameters including 'is_diff'
            - uns["scdesim_config"]: simulation config as dict

        Raises:
            ImportError: If anndata is not installed.
        """
        self._require_simulated()
        return to_anndata(
            counts=self._counts,
            metadata=self._metadata,
            geneparams=self.gene_params(),
            config=self.config,
        )
