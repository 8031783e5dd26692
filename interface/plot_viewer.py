import streamlit as st
import pandas as pd

from de_pipeline.processor import run_all
from de_pipeline.reshaping import PVALUE_COLUMNS, combine_pval, create_facets, gene_sets, trim_results
from de_pipeline.types import DEResults
from interface.backend.session_schema import ExperimentConfig
from interface.plotting.plot_de import build_pval_histogram, build_venn_diagram, theme_plot
from interface.plotting.utils import render_plot_data_tables


def _run_analysis(counts: pd.DataFrame, config: ExperimentConfig):
    with st.spinner("Running DESeq2, edgeR and limma-voom..."):
        try:
            st.session_state["de_results"] = run_all(counts, config)
        except Exception as e:
            st.error(f"Analysis failed: {e}")
            return
    st.success("Differential expression analysis complete.")


def _plot_controls(config: ExperimentConfig):
    st.markdown("### Plot Configuration")
    col1, col2 = st.columns(2)
    with col1:
        trim = st.checkbox(f"Keep only the top {config['top_n']} genes per package", value=True)
    with col2:
        venn_mode = st.radio(
            "Venn membership",
            [f"padj < {config['venn_padj']:g}", "All reported genes"],
            horizontal=True,
        )
    return {"trim": trim, "venn_significant": venn_mode != "All reported genes"}


def _render_summary(results: dict[str, pd.DataFrame]):
    summary = pd.DataFrame({
        "Package": list(results),
        "Genes": [len(res) for res in results.values()],
        "p < 0.05": [int((res[PVALUE_COLUMNS[pkg]] < 0.05).sum()) for pkg, res in results.items()],
    })
    st.dataframe(summary, use_container_width=True, hide_index=True)


def run():
    st.title("Differential Expression Comparison")

    counts: pd.DataFrame = st.session_state.get("counts_df")
    config: ExperimentConfig = st.session_state.get("experiment_config")

    if counts is None or config is None or counts.empty:
        st.info("Please import a count matrix and configure the experiment.")
        return

    if st.button("Run Analysis", type="primary", use_container_width=True):
        _run_analysis(counts, config)

    de_results: DEResults = st.session_state.get("de_results")
    if de_results is None:
        st.info("Run the analysis to see the plots.")
        return

    opts = _plot_controls(config)
    results = de_results.as_dict()
    if opts["trim"]:
        results = trim_results(results, config["top_n"])
    deseq, edger, limma = results["DESeq2"], results["edgeR"], results["limma"]

    _render_summary(results)

    tab_hist, tab_volcano, tab_venn = st.tabs(["P-value Histograms", "Volcano", "Venn Diagram"])

    with tab_hist:
        pvals = combine_pval(deseq, edger, limma)
        st.plotly_chart(build_pval_histogram(pvals), use_container_width=True)
        render_plot_data_tables(pvals, "P-value", sort_by="pval")

    with tab_volcano:
        volcano = create_facets(deseq, edger, limma)
        st.plotly_chart(theme_plot(volcano, config["volcano_threshold"]), use_container_width=True)
        render_plot_data_tables(volcano, "Volcano", sort_by="padj")

    with tab_venn:
        padj = config["venn_padj"] if opts["venn_significant"] else None
        sets = gene_sets(deseq, edger, limma, padj=padj)
        st.plotly_chart(build_venn_diagram(sets), use_container_width=True)
        st.caption(f"Contrast: `{de_results.contrast.condition_name}`")


run()
