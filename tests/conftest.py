"""
Test configuration and fixtures for the DE comparison pipeline.
"""
import numpy as np
import pandas as pd
import pytest

from interface.backend.session_schema import DEFAULT_SAMPLES, default_experiment_config


def _genes(n):
    return [f"ENSMUSG{i:011d}.1" for i in range(n)]


def _count_matrix(n_genes, seed=42):
    rng = np.random.default_rng(seed)
    counts = rng.negative_binomial(n=10, p=0.1, size=(n_genes, len(DEFAULT_SAMPLES)))
    # first tenth of genes up in the adult samples
    n_up = max(n_genes // 10, 1)
    counts[:n_up, 2:] = counts[:n_up, 2:] * 8
    df = pd.DataFrame(counts, index=_genes(n_genes), columns=DEFAULT_SAMPLES)
    df.index.name = "gene"
    return df


@pytest.fixture
def sample_count_matrix():
    """20 genes x 4 samples (vP0_1, vP0_2, vAd_1, vAd_2)."""
    return _count_matrix(20)


@pytest.fixture
def large_count_matrix():
    """500 genes x 4 samples, enough for the R dispersion estimators."""
    return _count_matrix(500, seed=7)


@pytest.fixture
def counts_file(tmp_path, sample_count_matrix):
    """TSV with the four samples plus columns the loader must drop."""
    df = sample_count_matrix.reset_index()
    df.insert(1, "length", 1000)
    df["vE16_1"] = 5
    path = tmp_path / "verse_counts.tsv"
    df.to_csv(path, sep="\t", index=False)
    return path


@pytest.fixture
def experiment_config():
    return default_experiment_config()


def _pvalues(rng, n):
    p = rng.uniform(1e-12, 1, size=n)
    return p, np.minimum(p * 3, 1)


@pytest.fixture
def deseq_results(sample_count_matrix):
    rng = np.random.default_rng(1)
    p, padj = _pvalues(rng, len(sample_count_matrix))
    return pd.DataFrame(
        {
            "baseMean": rng.uniform(10, 1000, len(p)),
            "log2FoldChange": rng.normal(0, 2, len(p)),
            "lfcSE": rng.uniform(0.1, 1, len(p)),
            "stat": rng.normal(0, 3, len(p)),
            "pvalue": p,
            "padj": padj,
        },
        index=sample_count_matrix.index,
    )


@pytest.fixture
def edger_results(sample_count_matrix):
    rng = np.random.default_rng(2)
    p, padj = _pvalues(rng, len(sample_count_matrix))
    return pd.DataFrame(
        {
            "logFC": rng.normal(0, 2, len(p)),
            "logCPM": rng.uniform(2, 12, len(p)),
            "PValue": p,
            "padj": padj,
        },
        index=sample_count_matrix.index,
    )


@pytest.fixture
def limma_results(sample_count_matrix):
    rng = np.random.default_rng(3)
    p, padj = _pvalues(rng, len(sample_count_matrix))
    df = pd.DataFrame(
        {
            "logFC": rng.normal(0, 2, len(p)),
            "AveExpr": rng.uniform(2, 12, len(p)),
            "t": rng.normal(0, 3, len(p)),
            "P.Value": p,
            "adj.P.Val": padj,
            "B": rng.normal(0, 1, len(p)),
        },
        index=sample_count_matrix.index,
    )
    return df.sort_values("P.Value")
