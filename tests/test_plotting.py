"""
Tests for the comparison plots.
"""
import numpy as np
import pytest
from plotly.graph_objects import Figure

from de_pipeline.reshaping import combine_pval, create_facets
from interface.plotting.plot_de import (
    ABOVE,
    BELOW,
    build_pval_histogram,
    build_venn_diagram,
    theme_plot,
)


@pytest.fixture
def volcano_data(deseq_results, edger_results, limma_results):
    deseq_results.iloc[:3, deseq_results.columns.get_loc("padj")] = [1e-150, 0.0, np.nan]
    return create_facets(deseq_results, edger_results, limma_results)


class TestVolcano:

    def test_returns_faceted_figure(self, volcano_data):
        fig = theme_plot(volcano_data)

        assert isinstance(fig, Figure)
        facet_titles = [a.text for a in fig.layout.annotations]
        assert facet_titles == ["DESeq2", "edgeR", "limma"]

    def test_colours_by_threshold(self, volcano_data):
        fig = theme_plot(volcano_data)

        names = {trace.name for trace in fig.data}
        assert names == {ABOVE, BELOW}
        colours = {ABOVE: "cornflowerblue", BELOW: "darkblue"}
        for trace in fig.data:
            assert trace.marker.color == colours[trace.name]

    def test_drops_missing_and_keeps_zero_finite(self, volcano_data):
        fig = theme_plot(volcano_data)

        n_points = sum(len(trace.x) for trace in fig.data)
        assert n_points == len(volcano_data) - 1
        all_y = np.concatenate([np.asarray(trace.y, dtype=float) for trace in fig.data])
        assert np.isfinite(all_y).all()

    def test_theme(self, volcano_data):
        fig = theme_plot(volcano_data)

        assert fig.layout.plot_bgcolor == "white"
        assert fig.layout.annotations[0].bgcolor == "lightblue"
        assert len(fig.layout.shapes) >= 1
        assert fig.layout.shapes[0].line.dash == "dash"


class TestPvalHistogram:

    def test_one_panel_per_package(self, deseq_results, edger_results, limma_results):
        pvals = combine_pval(deseq_results, edger_results, limma_results)
        fig = build_pval_histogram(pvals)

        assert [a.text for a in fig.layout.annotations] == ["DESeq2", "edgeR", "limma"]
        assert sum(len(trace.x) for trace in fig.data) == 60
        assert tuple(fig.layout.xaxis.range) == (0, 1)

    def test_missing_pvalues_dropped(self, deseq_results, edger_results, limma_results):
        deseq_results.iloc[:4, deseq_results.columns.get_loc("pvalue")] = np.nan
        pvals = combine_pval(deseq_results, edger_results, limma_results)
        fig = build_pval_histogram(pvals)

        assert sum(len(trace.x) for trace in fig.data) == 56


class TestVenn:

    def test_three_sets(self):
        sets = {"DESeq2": {1, 2, 3, 4}, "edgeR": {3, 4, 5}, "limma": {4, 6}}
        fig = build_venn_diagram(sets)

        assert len(fig.layout.shapes) == 3
        texts = [a.text for a in fig.layout.annotations]
        assert len(texts) == 7 + 3
        assert sorted(int(t) for t in texts[:7]) == [0, 0, 1, 1, 1, 1, 2]
        assert "<b>DESeq2</b> (4)" in texts

    def test_two_sets(self):
        fig = build_venn_diagram({"DESeq2": {1, 2}, "edgeR": {2, 3, 4}})

        assert len(fig.layout.shapes) == 2
        texts = [a.text for a in fig.layout.annotations]
        assert texts[:3] == ["1", "2", "1"]

    def test_rejects_other_sizes(self):
        with pytest.raises(ValueError, match="2 or 3 sets"):
            build_venn_diagram({"DESeq2": {1}})
