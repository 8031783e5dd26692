# de_pipeline/validators.py
from typing import Optional

import numpy as np
import pandas as pd

from de_pipeline.types import Contrast


def validate_counts(counts: pd.DataFrame, samples: Optional[list[str]] = None) -> list[str]:
    """Check a count matrix, restricted to ``samples`` when given."""
    errors = []

    if samples is not None:
        absent = [s for s in samples if s not in counts.columns]
        errors.extend(f"Sample '{s}' not found in the count matrix" for s in absent)
        counts = counts[[s for s in samples if s in counts.columns]]

    if counts.empty:
        errors.append("Count matrix is empty")
        return errors

    dupes = counts.index[counts.index.duplicated()].unique().tolist()
    if dupes:
        errors.append(f"Duplicated gene identifiers: {dupes[:10]}")

    for col in counts.columns:
        values = counts[col]
        if not pd.api.types.is_numeric_dtype(values):
            errors.append(f"Sample '{col}' has non-numeric counts")
            continue
        if values.isna().any():
            errors.append(f"Sample '{col}' has missing counts")
        if (values < 0).any():
            errors.append(f"Sample '{col}' has negative counts")
        if not np.allclose(values.dropna(), np.round(values.dropna())):
            errors.append(f"Sample '{col}' has non-integer counts")

    return errors


def validate_config(config) -> list[str]:
    errors = []

    try:
        contrast = Contrast.from_condition_name(config["condition_name"])
    except ValueError as e:
        errors.append(str(e))
        contrast = None

    samples = config["samples"]
    conditions = config["conditions"]
    groups = config.get("groups") or conditions

    for sample in samples:
        if not conditions.get(sample):
            errors.append(f"Missing condition for sample '{sample}'")
        if not groups.get(sample):
            errors.append(f"Missing group for sample '{sample}'")

    if contrast is not None:
        assigned = [conditions.get(s) for s in samples]
        grouped = [groups.get(s) for s in samples]

        # "cell_type_Ad_vs_P0" parses as factor "cell", numerator "type_Ad"
        head, sep, tail = contrast.numerator.partition("_")
        if sep and contrast.numerator not in assigned and tail in assigned:
            errors.append(
                f"Factor name '{contrast.factor}_{head}' must not contain '_', "
                f"use e.g. '{contrast.factor}.{head}'"
            )
            levels = [contrast.denominator]
        else:
            levels = contrast.levels

        for level in levels:
            if level not in assigned:
                errors.append(f"Contrast level '{level}' has no samples")
            elif level not in grouped:
                errors.append(f"Contrast level '{level}' has no samples in the edgeR/limma groups")

    if config["count_filter"] < 0:
        errors.append("Count filter must not be negative")
    if config["top_n"] <= 0:
        errors.append("Top-N must be positive")

    return errors
