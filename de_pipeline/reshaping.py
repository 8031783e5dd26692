# de_pipeline/reshaping.py

from itertools import combinations
from typing import Optional

import pandas as pd

from de_pipeline.types import PACKAGES

# Each package names its columns differently
PVALUE_COLUMNS = {"DESeq2": "pvalue", "edgeR": "PValue", "limma": "P.Value"}
PADJ_COLUMNS = {"DESeq2": "padj", "edgeR": "padj", "limma": "adj.P.Val"}
LOGFC_COLUMNS = {"DESeq2": "log2FoldChange", "edgeR": "logFC", "limma": "logFC"}


def _long(results: pd.DataFrame, package: str, columns: dict[str, str], order: list[str]) -> pd.DataFrame:
    missing = [src for src in columns if src not in results.columns]
    if missing:
        raise ValueError(f"{package} results are missing columns: {missing}")

    long = pd.DataFrame(results[list(columns)]).rename(columns=columns)
    long["package"] = package
    return long[order]


def combine_pval(deseq: pd.DataFrame, edger: pd.DataFrame, limma: pd.DataFrame) -> pd.DataFrame:
    """Stack the three p-value columns into a ``package``/``pval`` long table.

    Rows keep their gene identifier as index, so a gene appears once per
    package that tested it.
    """
    frames = [
        _long(res, pkg, {PVALUE_COLUMNS[pkg]: "pval"}, ["package", "pval"])
        for pkg, res in zip(PACKAGES, (deseq, edger, limma))
    ]
    return pd.concat(frames)


def create_facets(deseq: pd.DataFrame, edger: pd.DataFrame, limma: pd.DataFrame) -> pd.DataFrame:
    """Long ``logFC``/``padj``/``package`` table used for the volcano facets."""
    frames = [
        _long(
            res,
            pkg,
            {LOGFC_COLUMNS[pkg]: "logFC", PADJ_COLUMNS[pkg]: "padj"},
            ["logFC", "padj", "package"],
        )
        for pkg, res in zip(PACKAGES, (deseq, edger, limma))
    ]
    return pd.concat(frames)


def top_n(results: pd.DataFrame, n: int, column: str) -> pd.DataFrame:
    if n < 0:
        raise ValueError("n must not be negative")
    return results.sort_values(column, kind="mergesort", na_position="last").head(n)


def trim_results(results: dict[str, pd.DataFrame], n: int) -> dict[str, pd.DataFrame]:
    """Keep the ``n`` smallest p-values of each package's table."""
    return {pkg: top_n(res, n, PVALUE_COLUMNS[pkg]) for pkg, res in results.items()}


def gene_sets(
    deseq: pd.DataFrame,
    edger: pd.DataFrame,
    limma: pd.DataFrame,
    padj: Optional[float] = None,
) -> dict[str, set]:
    sets = {}
    for pkg, res in zip(PACKAGES, (deseq, edger, limma)):
        if padj is not None:
            res = res[res[PADJ_COLUMNS[pkg]] < padj]
        sets[pkg] = set(res.index)
    return sets


def venn_regions(sets: dict[str, set]) -> dict[tuple, int]:
    """Count genes in each exclusive region of the overlap.

    The key lists the sets a region belongs to, e.g. ``("DESeq2", "limma")``
    counts genes found by DESeq2 and limma but not by edgeR.
    """
    labels = list(sets)
    regions = {}
    for size in range(1, len(labels) + 1):
        for members in combinations(labels, size):
            inside = set.intersection(*(sets[m] for m in members))
            outside = set().union(*(sets[o] for o in labels if o not in members))
            regions[members] = len(inside - outside)
    return regions
