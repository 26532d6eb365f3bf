"""Configuration classes for the sex x pathology single-cell DE simulation."""

from dataclasses import dataclass, field
from typing import Optional, Sequence


class ConfigurationError(ValueError):
    """Raised when simulation inputs are inconsistent and the run cannot proceed."""


@dataclass(frozen=True)
class SampleSpec:
    """One simulated biological sample.

    Attributes:
        sample_id: Sample identifier written to the metadata table.
        sex: Sex of the donor ("female" or "male").
        pathology: Disease status ("control" or "disease").
        cell_tag: Prefix for the sample's cell labels. Must be unique across samples.
    """

    sample_id: str
    sex: str
    pathology: str
    cell_tag: str


DEFAULT_SAMPLES: tuple[SampleSpec, ...] = (
    SampleSpec("sample_1", "female", "control", "female_control_"),
    SampleSpec("sample_2", "female", "disease", "female_disease_"),
    SampleSpec("sample_3", "male", "control", "male_control_"),
    SampleSpec("sample_4", "male", "disease", "male_disease_"),
)


@dataclass
class SimulationConfig:
    """Configuration parameters for the DE benchmark simulation.

    Attributes:
        n_cells: Number of cells simulated per sample.
        n_genes: Number of genes drawn from the gene universe.
        n_diff_genes: Number of signal genes injected into the signal sample.
        baseline_mean: Mean of the normal distribution for baseline gene means.
        baseline_sd: Standard deviation of the normal distribution for baseline gene means.
        noise_sd: Standard deviation of the per-sample multiplicative noise.
        diff_mean: Mean of the normal distribution for elevated signal-gene means.
        diff_sd: Standard deviation of the normal distribution for elevated signal-gene means.
        nb_size: Negative binomial shape (dispersion) parameter.
        n_pseudobulks: Number of pseudobulk groups each sample is split into.
        seed: Random seed for reproducibility.
        gene_list_path: Newline-delimited gene symbol file. Synthetic names are used if None.
        samples: The simulated samples, in matrix column order.
        signal_sample: sample_id of the only sample that carries the injected signal.
    """

    n_cells: int = 500
    n_genes: int = 2000
    n_diff_genes: int = 100
    baseline_mean: float = 2.0
    baseline_sd: float = 1.0
    noise_sd: float = 0.1
    diff_mean: float = 6.0
    diff_sd: float = 2.0
    nb_size: float = 5.0
    n_pseudobulks: int = 10
    seed: int = 42
    gene_list_path: Optional[str] = None
    samples: Sequence[SampleSpec] = field(default_factory=lambda: DEFAULT_SAMPLES)
    signal_sample: str = "sample_4"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self.samples = tuple(self.samples)
        self._validate()

    def _validate(self) -> None:
        """Validate that all parameters are within acceptable ranges."""
        if self.n_cells <= 0:
            raise ConfigurationError("n_cells must be positive")
        if self.n_genes <= 0:
            raise ConfigurationError("n_genes must be positive")
        if self.n_diff_genes < 0:
            raise ConfigurationError("n_diff_genes must be non-negative")
        if self.n_diff_genes > self.n_genes:
            raise ConfigurationError(
                f"n_diff_genes ({self.n_diff_genes}) cannot exceed "
                f"n_genes ({self.n_genes})"
            )
        if self.n_pseudobulks <= 0:
            raise ConfigurationError("n_pseudobulks must be positive")
        if self.n_cells % self.n_pseudobulks != 0:
            raise ConfigurationError(
                f"n_cells ({self.n_cells}) must be divisible by "
                f"n_pseudobulks ({self.n_pseudobulks})"
            )

        # Validate spreads and shape
        for name in ("baseline_sd", "noise_sd", "diff_sd"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be non-negative")
        if self.nb_size <= 0:
            raise ConfigurationError("nb_size must be positive")

        # Validate the sample design
        if not self.samples:
            raise ConfigurationError("at least one sample is required")
        sample_ids = [s.sample_id for s in self.samples]
        if len(set(sample_ids)) != len(sample_ids):
            raise ConfigurationError("sample_id values must be unique")
        tags = [s.cell_tag for s in self.samples]
        if len(set(tags)) != len(tags):
            raise ConfigurationError("cell_tag values must be unique across samples")
        if self.signal_sample not in sample_ids:
            raise ConfigurationError(
                f"signal_sample {self.signal_sample!r} is not one of {sample_ids}"
            )
