"""Export functionality for DE benchmark simulation results."""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Union

import pandas as pd

from .config import SimulationConfig

if TYPE_CHECKING:
    import anndata

    from .simulator import DESim

logger = logging.getLogger(__name__)


def config_to_dict(config: SimulationConfig) -> dict:
    """Flatten a config into a dict that can be stored in AnnData.uns.

    Samples are keyed by sample_id and a missing gene list path becomes "".
    """
    params = asdict(config)
    params["samples"] = {
        s.sample_id: {"sex": s.sex, "pathology": s.pathology, "cell_tag": s.cell_tag}
        for s in config.samples
    }
    if params["gene_list_path"] is None:
        params["gene_list_path"] = ""
    else:
        params["gene_list_path"] = str(params["gene_list_path"])
    return params


def to_anndata(
    counts: pd.DataFrame,
    metadata: pd.DataFrame,
    geneparams: pd.DataFrame,
    config: SimulationConfig,
) -> "anndata.AnnData":
    """Export simulation results to an AnnData object.

    Requires the `anndata` package to be installed.
    Install with: `pip install scdesim[anndata]`

    Args:
        counts: Gene x cell count matrix.
        metadata: Per-cell metadata aligned with the columns of counts.
        geneparams: Per-gene parameters indexed like the rows of counts.
        config: Simulation configuration.

    Returns:
        AnnData object with:
        - X: count matrix (cells x genes)
        - obs: per-cell metadata
        - var: gene parameters including 'is_diff'
        - uns["scdesim_config"]: simulation config as dict

    Raises:
        ImportError: If anndata is not installed.
    """
    try:
        import anndata
    except ImportError as e:
        raise ImportError(
            "anndata is required for to_anndata(). "
            "Install with: pip install scdesim[anndata]"
        ) from e

    adata = anndata.AnnData(
        X=counts.T.to_numpy(),
        obs=metadata.copy(),
        var=geneparams.reindex(counts.index).copy(),
    )
    adata.uns["scdesim_config"] = config_to_dict(config)
    return adata


def write_outputs(
    sim: "DESim",
    outdir: Union[str, Path],
    h5ad: bool = False,
) -> list[Path]:
    """Write the count matrix, metadata and ground truth of a finished run.

    Args:
        sim: A simulator on which simulate() has been called.
        outdir: Output directory, created if needed.
        h5ad: Also write an AnnData file (requires anndata).

    Returns:
        Paths of the files written.
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    paths = [
        outdir / "counts.csv",
        outdir / "metadata.csv",
        outdir / "ground_truth.csv",
    ]
    sim.counts.to_csv(paths[0])
    sim.metadata.to_csv(paths[1])
    sim.ground_truth.to_frame().to_csv(paths[2])

    if h5ad:
        path = outdir / "simulation.h5ad"
        sim.to_anndata().write_h5ad(path)
        paths.append(path)

    for path in paths:
        logger.info(f"Wrote {path}")
    return paths
