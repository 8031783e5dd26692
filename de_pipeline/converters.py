# de_pipeline/converters.py

import logging
from typing import Optional

import numpy as np
import pandas as pd

from interface.backend.session_schema import DEFAULT_SAMPLES

logger = logging.getLogger(__name__)


def _rewind(file):
    if hasattr(file, "seek"):
        file.seek(0)


def read_header(filename) -> list[str]:
    """Return the column names of a tab-separated counts file."""
    _rewind(filename)
    header = pd.read_csv(filename, sep="\t", nrows=0)
    _rewind(filename)
    return [str(c) for c in header.columns]


def load_n_trim(
    filename,
    samples: Optional[list[str]] = None,
    gene_column: str = "gene",
) -> pd.DataFrame:
    """Load a counts file and keep only the requested sample columns.

    Rows are indexed by the gene column. The result is a plain DataFrame of
    genes x samples, which is what the R packages expect as a count matrix.
    """
    samples = list(DEFAULT_SAMPLES if samples is None else samples)

    _rewind(filename)
    counts_data = pd.read_csv(filename, sep="\t")

    expected = samples + [gene_column]
    missing = [col for col in expected if col not in counts_data.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    selected = counts_data[expected].set_index(gene_column)
    selected.index = selected.index.astype(str)
    logger.info(f"Loaded {selected.shape[0]} genes x {selected.shape[1]} samples")
    return selected


def build_coldata(samples: list[str], conditions: dict[str, str], factor: str = "condition") -> pd.DataFrame:
    """DESeq2 colData: one row per sample, one column named after the factor."""
    coldata = pd.DataFrame(
        {factor: [conditions[s] for s in samples]},
        index=pd.Index(samples, name="sample"),
    )
    return coldata


def build_group(samples: list[str], groups: dict[str, str], levels: list[str]) -> pd.Series:
    # reference level first, any other labels after in sorted order
    labels = [groups[s] for s in samples]
    extra = sorted(set(labels) - set(levels))
    categories = [lvl for lvl in levels if lvl in labels] + extra
    return pd.Series(
        pd.Categorical(labels, categories=categories),
        index=pd.Index(samples, name="sample"),
        name="group",
    )


def build_design_matrix(group: pd.Series, reference: str, target: str) -> pd.DataFrame:
    """Model matrix for ``~group`` with ``target`` as the last coefficient."""
    categories = list(group.cat.categories) if hasattr(group, "cat") else sorted(set(group))
    if reference not in categories or target not in categories:
        raise ValueError(f"Design levels {reference!r}/{target!r} not in group {categories}")

    others = [c for c in categories if c not in (reference, target)]
    design = pd.DataFrame(index=group.index)
    design["(Intercept)"] = 1.0
    for level in others + [target]:
        design[f"group{level}"] = (group.astype(str) == level).astype(np.float64)
    return design
