import logging
from typing import Optional

import pandas as pd

from interface.backend.session_schema import ExperimentConfig, default_experiment_config
from de_pipeline import r_bridge
from de_pipeline.converters import build_coldata, build_design_matrix, build_group, load_n_trim
from de_pipeline.types import Contrast, DEResults
from de_pipeline.validators import validate_config, validate_counts

logger = logging.getLogger(__name__)


def run_deseq(
    count_dataframe: pd.DataFrame,
    coldata: pd.DataFrame,
    count_filter: int,
    condition_name: str,
) -> pd.DataFrame:
    """Run DESeq2 on genes whose total count reaches ``count_filter``.

    ``condition_name`` follows ``<factor>_<numerator>_vs_<denominator>`` and
    selects the contrast passed to ``DESeq2::results``. Returns baseMean,
    log2FoldChange, lfcSE, stat, pvalue and padj indexed by gene.
    """
    r_bridge.require_r(["DESeq2"])
    contrast = Contrast.from_condition_name(condition_name)

    dds_obj = count_dataframe[count_dataframe.sum(axis=1) >= count_filter]
    logger.info(f"DESeq2: {len(dds_obj)}/{len(count_dataframe)} genes with total count >= {count_filter}")

    coldata = coldata.loc[dds_obj.columns]
    res = r_bridge.call_r(
        "deseq2",
        r_bridge.to_r(dds_obj),
        r_bridge.to_r(coldata),
        contrast.factor,
        contrast.numerator,
        contrast.denominator,
    )
    res.index.name = count_dataframe.index.name
    logger.info(f"DESeq2 results: {len(res)} genes for {contrast.condition_name}")
    return res


def run_edger(count_dataframe: pd.DataFrame, group: pd.Series) -> pd.DataFrame:
    """Run the edgeR classic workflow (exactTest) on the two first group levels."""
    r_bridge.require_r(["edgeR"])

    group = group.loc[count_dataframe.columns]
    levels = list(group.cat.categories)
    res = r_bridge.call_r(
        "edger",
        r_bridge.to_r(count_dataframe),
        r_bridge.str_vector(group),
        r_bridge.str_vector(levels),
    )
    res.index.name = count_dataframe.index.name
    logger.info(f"edgeR results: {len(res)}/{len(count_dataframe)} genes kept by filterByExpr")
    return res


def run_limma(counts_dataframe: pd.DataFrame, design: pd.DataFrame, group: pd.Series) -> pd.DataFrame:
    # topTable on the last design column, every gene, sorted by p-value
    r_bridge.require_r(["edgeR", "limma"])

    design = design.loc[counts_dataframe.columns]
    group = group.loc[counts_dataframe.columns]
    res = r_bridge.call_r(
        "limma",
        r_bridge.to_r(counts_dataframe),
        r_bridge.to_r(design),
        r_bridge.str_vector(group),
        r_bridge.str_vector(group.cat.categories),
    )
    res.index.name = counts_dataframe.index.name
    logger.info(f"limma-voom results: {len(res)}/{len(counts_dataframe)} genes, coefficient '{design.columns[-1]}'")
    return res


def run_all(counts: pd.DataFrame, config: ExperimentConfig) -> DEResults:
    samples = config["samples"]
    errors = validate_counts(counts, samples) + validate_config(config)
    if errors:
        raise ValueError("Invalid analysis input:\n" + "\n".join(errors))

    contrast = Contrast.from_condition_name(config["condition_name"])
    counts = counts[samples]

    coldata = build_coldata(samples, config["conditions"], contrast.factor)
    group = build_group(samples, config.get("groups") or config["conditions"], contrast.levels)
    design = build_design_matrix(group, reference=contrast.denominator, target=contrast.numerator)

    logger.info(f"Comparing {contrast.numerator} vs {contrast.denominator} over {len(samples)} samples")

    deseq = run_deseq(counts, coldata, config["count_filter"], contrast.condition_name)
    edger = run_edger(counts, group)
    limma = run_limma(counts, design, group)

    return DEResults(deseq=deseq, edger=edger, limma=limma, contrast=contrast)


def run_pipeline(filename, config: Optional[ExperimentConfig] = None) -> DEResults:
    """Load a counts file and run DESeq2, edgeR and limma-voom on it."""
    config = config or default_experiment_config()
    counts = load_n_trim(filename, config["samples"], config["gene_column"])
    return run_all(counts, config)
