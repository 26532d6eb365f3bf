"""Command-line entry point for running a simulation and writing its outputs."""

import argparse
import logging
from typing import Optional, Sequence

from .config import SimulationConfig
from .exporters import write_outputs
from .simulator import DESim


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line options, defaulting to SimulationConfig's values.

    Args:
        argv: Argument list. Uses sys.argv when None.

    Returns:
        Parsed arguments.
    """
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(
        prog="scdesim",
        description="Simulate a sex x pathology single-cell experiment with known DE genes.",
    )
    parser.add_argument(
        "--n-cells",
        type=int,
        default=defaults.n_cells,
        help="Number of cells per sample",
    )
    parser.add_argument(
        "--n-genes",
        type=int,
        default=defaults.n_genes,
        help="Number of genes sampled from the gene list",
    )
    parser.add_argument(
        "--n-diff-genes",
        type=int,
        default=defaults.n_diff_genes,
        help="Number of signal genes injected into the signal sample",
    )
    parser.add_argument(
        "--baseline-mean",
        type=float,
        default=defaults.baseline_mean,
        help="Mean of the baseline gene-mean distribution",
    )
    parser.add_argument(
        "--baseline-sd",
        type=float,
        default=defaults.baseline_sd,
        help="Standard deviation of the baseline gene-mean distribution",
    )
    parser.add_argument(
        "--noise-sd",
        type=float,
        default=defaults.noise_sd,
        help="Standard deviation of the per-sample multiplicative noise",
    )
    parser.add_argument(
        "--diff-mean",
        type=float,
        default=defaults.diff_mean,
        help="Mean of the elevated signal-gene distribution",
    )
    parser.add_argument(
        "--diff-sd",
        type=float,
        default=defaults.diff_sd,
        help="Standard deviation of the elevated signal-gene distribution",
    )
    parser.add_argument(
        "--nb-size",
        type=float,
        default=defaults.nb_size,
        help="Negative binomial shape parameter",
    )
    parser.add_argument(
        "--n-pseudobulks",
        type=int,
        default=defaults.n_pseudobulks,
        help="Number of pseudobulk groups per sample",
    )
    parser.add_argument("--seed", type=int, default=defaults.seed, help="Random seed")
    parser.add_argument(
        "--gene-list",
        type=str,
        default=None,
        help="Newline-delimited gene symbol file (synthetic names if omitted)",
    )
    parser.add_argument(
        "--outdir",
        type=str,
        default="simulation",
        help="Directory in which to save the output files",
    )
    parser.add_argument(
        "--h5ad", action="store_true", help="Also write an AnnData .h5ad file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one simulation from the command line and write its outputs.

    Args:
        argv: Argument list. Uses sys.argv when None.

    Returns:
        Process exit code.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    config = SimulationConfig(
        n_cells=args.n_cells,
        n_genes=args.n_genes,
        n_diff_genes=args.n_diff_genes,
        baseline_mean=args.baseline_mean,
        baseline_sd=args.baseline_sd,
        noise_sd=args.noise_sd,
        diff_mean=args.diff_mean,
        diff_sd=args.diff_sd,
        nb_size=args.nb_size,
        n_pseudobulks=args.n_pseudobulks,
        seed=args.seed,
        gene_list_path=args.gene_list,
    )
    sim = DESim(config).simulate()
    write_outputs(sim, args.outdir, h5ad=args.h5ad)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
