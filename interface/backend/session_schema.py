# interface/backend/session_schema.py

from typing import TypedDict

DEFAULT_SAMPLES = ["vP0_1", "vP0_2", "vAd_1", "vAd_2"]


class ExperimentConfig(TypedDict):
    samples: list[str]
    gene_column: str
    conditions: dict[str, str]
    groups: dict[str, str]
    condition_name: str
    count_filter: int
    top_n: int
    volcano_threshold: float
    venn_padj: float


def default_experiment_config() -> ExperimentConfig:
    conditions = {"vP0_1": "P0", "vP0_2": "P0", "vAd_1": "Ad", "vAd_2": "Ad"}
    return {
        "samples": list(DEFAULT_SAMPLES),
        "gene_column": "gene",
        "conditions": conditions,
        "groups": dict(conditions),
        "condition_name": "condition_Ad_vs_P0",
        "count_filter": 10,
        "top_n": 1000,
        "volcano_threshold": 1e-100,
        "venn_padj": 0.05,
    }
