"""
Tests for count matrix and configuration validation.
"""
import numpy as np

from de_pipeline.validators import validate_config, validate_counts


class TestValidateCounts:

    def test_valid_matrix(self, sample_count_matrix):
        assert validate_counts(sample_count_matrix) == []

    def test_empty_matrix(self, sample_count_matrix):
        errors = validate_counts(sample_count_matrix.iloc[0:0])
        assert errors == ["Count matrix is empty"]

    def test_negative_counts(self, sample_count_matrix):
        counts = sample_count_matrix.copy()
        counts.iloc[0, 0] = -1
        errors = validate_counts(counts)
        assert any("negative" in e for e in errors)

    def test_fractional_counts(self, sample_count_matrix):
        counts = sample_count_matrix.astype(float)
        counts.iloc[3, 1] = 2.5
        errors = validate_counts(counts)
        assert errors == ["Sample 'vP0_2' has non-integer counts"]

    def test_missing_counts(self, sample_count_matrix):
        counts = sample_count_matrix.astype(float)
        counts.iloc[3, 2] = np.nan
        errors = validate_counts(counts)
        assert errors == ["Sample 'vAd_1' has missing counts"]

    def test_text_column(self, sample_count_matrix):
        counts = sample_count_matrix.copy()
        counts["vAd_2"] = "n/a"
        errors = validate_counts(counts)
        assert errors == ["Sample 'vAd_2' has non-numeric counts"]

    def test_duplicated_genes(self, sample_count_matrix):
        counts = sample_count_matrix.rename(index={sample_count_matrix.index[1]: sample_count_matrix.index[0]})
        errors = validate_counts(counts)
        assert len(errors) == 1
        assert errors[0].startswith("Duplicated gene identifiers")


class TestValidateConfig:

    def test_default_config_is_valid(self, experiment_config):
        assert validate_config(experiment_config) == []

    def test_unparseable_condition_name(self, experiment_config):
        experiment_config["condition_name"] = "Ad_P0"
        errors = validate_config(experiment_config)
        assert any("Could not parse" in e for e in errors)

    def test_contrast_level_without_samples(self, experiment_config):
        experiment_config["condition_name"] = "condition_E16_vs_P0"
        errors = validate_config(experiment_config)
        assert errors == ["Contrast level 'E16' has no samples"]

    def test_contrast_level_missing_from_groups(self, experiment_config):
        experiment_config["groups"] = {s: "1" for s in experiment_config["samples"]}
        errors = validate_config(experiment_config)
        assert len(errors) == 2
        assert all("edgeR/limma groups" in e for e in errors)

    def test_empty_groups_fall_back_to_conditions(self, experiment_config):
        experiment_config["groups"] = {}
        assert validate_config(experiment_config) == []

    def test_missing_condition(self, experiment_config):
        experiment_config["conditions"]["vAd_2"] = ""
        errors = validate_config(experiment_config)
        assert "Missing condition for sample 'vAd_2'" in errors

    def test_thresholds(self, experiment_config):
        experiment_config["count_filter"] = -1
        experiment_config["top_n"] = 0
        errors = validate_config(experiment_config)
        assert "Count filter must not be negative" in errors
        assert "Top-N must be positive" in errors

    def test_zero_count_filter_is_allowed(self, experiment_config):
        experiment_config["count_filter"] = 0
        assert validate_config(experiment_config) == []

    def test_underscore_in_factor_name(self, experiment_config):
        experiment_config["condition_name"] = "cell_type_Ad_vs_P0"
        errors = validate_config(experiment_config)
        assert errors == ["Factor name 'cell_type' must not contain '_', use e.g. 'cell.type'"]

    def test_space_in_factor_name(self, experiment_config):
        experiment_config["condition_name"] = "cell type_Ad_vs_P0"
        errors = validate_config(experiment_config)
        assert len(errors) == 1
        assert errors[0].startswith("Factor name 'cell type'")


class TestValidateCountsForSamples:

    def test_extra_columns_are_ignored(self, sample_count_matrix, experiment_config):
        counts = sample_count_matrix.assign(description="some gene")
        assert validate_counts(counts, experiment_config["samples"]) == []

    def test_absent_sample_reported(self, sample_count_matrix, experiment_config):
        counts = sample_count_matrix.drop(columns=["vAd_2"])
        errors = validate_counts(counts, experiment_config["samples"])
        assert errors == ["Sample 'vAd_2' not found in the count matrix"]
