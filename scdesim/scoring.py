"""Score differential-expression results against the simulated ground truth."""

import logging
from dataclasses import asdict, dataclass
from typing import Hashable, Optional, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

RANK_TABLE_COLUMNS = ["gene", "rank", "score", "effect", "label"]


@dataclass(frozen=True)
class GeneScore:
    """One gene's result from an external DE method.

    Attributes:
        gene: Gene identifier, matched against the ground-truth index unchanged.
        score: Significance score where smaller is more significant (p-value or
            adjusted p-value). NaN is allowed and ranks last.
        effect: Effect magnitude such as a log fold change, if available.
    """

    gene: Hashable
    score: float
    effect: Optional[float] = None


@dataclass(frozen=True)
class RankedGene:
    """Rank of one true signal gene in a method's full gene ranking."""

    gene: Hashable
    rank: int
    score: float
    effect: Optional[float]
    label: str


def scores_from_table(
    table: pd.DataFrame,
    score_col: str,
    effect_col: Optional[str] = None,
) -> list[GeneScore]:
    """Convert a gene-indexed result table into typed score rows.

    Row order is kept as given; ranking does not rely on it being sorted.

    Args:
        table: Result table indexed by gene identifier.
        score_col: Column holding p-values or adjusted p-values.
        effect_col: Optional column holding log fold changes.

    Returns:
        One GeneScore per row.
    """
    missing = [c for c in (score_col, effect_col) if c is not None and c not in table]
    if missing:
        raise KeyError(f"Result table is missing columns {missing}")

    scores = table[score_col].astype(float).to_numpy()
    if effect_col is None:
        effects = [None] * len(table)
    else:
        effects = table[effect_col].astype(float).tolist()
    return [
        GeneScore(gene=gene, score=float(score), effect=effect)
        for gene, score, effect in zip(table.index, scores, effects)
    ]


def rank_signal_genes(
    scores: Sequence[GeneScore],
    ground_truth: pd.Series,
    label: str,
) -> list[RankedGene]:
    """Rank all genes by ascending score and keep the true signal genes.

    Rank 1 is the smallest score. Ties are broken by input order, and
    missing scores are ranked after every finite one.

    Args:
        scores: Per-gene scores from one method, in any order.
        ground_truth: Boolean indicator indexed by gene identifier.
        label: Contrast or method label attached to every row.

    Returns:
        Ranked signal genes, ordered by rank.

    Raises:
        ValueError: If a gene appears more than once in scores.
    """
    genes = pd.Index([s.gene for s in scores])
    if genes.has_duplicates:
        raise ValueError(f"Duplicate genes in scores for {label!r}")

    values = pd.Series([s.score for s in scores], index=genes, dtype=float)
    ranks = values.rank(method="first", ascending=True, na_option="bottom")

    is_diff = ground_truth.reindex(genes, fill_value=False).astype(bool).to_numpy()
    n_missing = int(ground_truth.astype(bool).sum()) - int(is_diff.sum())
    if n_missing > 0:
        logger.warning(f"{n_missing} signal genes have no score in {label!r}")

    rows = [
        RankedGene(
            gene=s.gene,
            rank=int(rank),
            score=s.score,
            effect=s.effect,
            label=label,
        )
        for s, rank, flag in zip(scores, ranks.to_numpy(), is_diff)
        if flag
    ]
    return sorted(rows, key=lambda row: row.rank)


def rank_table(rows: Sequence[RankedGene]) -> pd.DataFrame:
    """Tabulate ranked signal genes."""
    return pd.DataFrame([asdict(r) for r in rows], columns=RANK_TABLE_COLUMNS)


def combine_rank_tables(*tables: pd.DataFrame) -> pd.DataFrame:
    """Union rank tables from several methods for comparison."""
    if not tables:
        return pd.DataFrame(columns=RANK_TABLE_COLUMNS)
    return pd.concat(tables, axis=0, ignore_index=True)


def annotate_ground_truth(results: pd.DataFrame, ground_truth: pd.Series) -> pd.DataFrame:
    """Return a copy of a gene-indexed result table with an is_diff column."""
    annotated = results.copy()
    annotated["is_diff"] = (
        ground_truth.reindex(annotated.index, fill_value=False).astype(bool).to_numpy()
    )
    return annotated


def summarize_ranks(table: pd.DataFrame, k: int = 100) -> pd.DataFrame:
    """Summarize a combined rank table per label.

    Args:
        table: Rank table, typically from combine_rank_tables.
        k: Cutoff for recall, counting signal genes ranked within the top k.

    Returns:
        DataFrame indexed by label with n_signal, median_rank, mean_rank and
        recall_at_k columns.
    """
    grouped = table.groupby("label", sort=False)["rank"]
    summary = pd.DataFrame(
        {
            "n_signal": grouped.size(),
            "median_rank": grouped.median(),
            "mean_rank": grouped.mean(),
            "recall_at_k": grouped.apply(lambda r: float(np.mean(r <= k))),
        }
    )
    summary.attrs["k"] = k
    return summary
