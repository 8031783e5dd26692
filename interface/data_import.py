import streamlit as st
import pandas as pd

from interface.components.counts_dialog import show_counts_import_dialog
from de_pipeline.converters import load_n_trim, read_header
from de_pipeline.validators import validate_counts


def run():
    col_title, col_button = st.columns([8, 1])

    with col_title:
        st.title("Count Matrix Import")

    # --- Step 1: Upload TSV ---
    with col_button:
        if st.button("Import TSV"):
            show_counts_import_dialog()

    uploaded = st.session_state.get("uploaded_counts_file")
    if uploaded is None:
        st.info("Use the **Import TSV** button to upload a count matrix.")
        return

    config = st.session_state["experiment_config"]

    try:
        columns = read_header(uploaded)
    except Exception as e:
        st.error(f"❌ `{uploaded.name}`: {e}")
        return

    # --- Step 2: Column Selection ---
    col1, col2 = st.columns(2)

    with col1:
        st.markdown("**Gene Column**")
        default_gene = config["gene_column"] if config["gene_column"] in columns else columns[0]
        gene_column = st.selectbox(
            "Column holding gene identifiers",
            options=columns,
            index=columns.index(default_gene),
        )

    with col2:
        st.markdown("**Sample Columns**")
        candidates = [c for c in columns if c != gene_column]
        default_samples = [s for s in config["samples"] if s in candidates] or candidates
        samples = st.multiselect("Samples to analyse", options=candidates, default=default_samples)

    if not samples:
        st.warning("Select at least one sample column.")
        return

    try:
        counts = load_n_trim(uploaded, samples, gene_column)
        st.success(f"✅ {uploaded.name}: {counts.shape[0]} genes x {counts.shape[1]} samples parsed.")
    except Exception as e:
        st.error(f"❌ `{uploaded.name}`: {e}")
        return

    for error in validate_counts(counts):
        st.warning(error)

    # --- Step 3: Visual Summary Overview ---
    summary = pd.DataFrame({
        "Sample": counts.columns,
        "Library Size": counts.sum(axis=0).values,
        "Detected Genes": (counts > 0).sum(axis=0).values,
    })
    st.dataframe(summary, use_container_width=True, hide_index=True)
    st.caption(f"{int((counts.sum(axis=1) == 0).sum())} genes have zero counts in every selected sample.")

    st.markdown("### Table Preview")
    st.dataframe(counts.head(50), use_container_width=True)

    # --- Step 4: Finalize + Load ---
    if st.button("Load into Session", type="primary", use_container_width=True):
        st.session_state["counts_df"] = counts
        st.session_state["de_results"] = None

        config["samples"] = list(samples)
        config["gene_column"] = gene_column
        config["conditions"] = {s: config["conditions"].get(s, "") for s in samples}
        config["groups"] = {s: config["groups"].get(s, "") for s in samples}

        st.toast("Counts loaded into session.")
        st.session_state.pop("uploaded_counts_file", None)
        st.switch_page("interface/setup_experiment.py")


run()
