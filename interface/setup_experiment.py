# interface/setup_experiment.py

import streamlit as st
import pandas as pd

from de_pipeline.types import Contrast
from de_pipeline.validators import validate_config
from interface.backend.session_schema import ExperimentConfig, default_experiment_config

# --- DIALOGS ---

@st.dialog("Reset all config?", width="small")
def clear_all_config_dialog():
    st.error("This cannot be undone.")
    if st.button("Confirm Reset", use_container_width=True):
        st.session_state.experiment_config = default_experiment_config()
        st.session_state.de_results = None
        st.rerun()

# --- HELPERS ---

def _current_contrast(config: ExperimentConfig):
    try:
        return Contrast.from_condition_name(config["condition_name"])
    except ValueError:
        return None


def render_sample_table(config: ExperimentConfig):
    editor_df = pd.DataFrame({
        "Sample": config["samples"],
        "Condition": [config["conditions"].get(s, "") for s in config["samples"]],
        "Group": [(config.get("groups") or {}).get(s, "") for s in config["samples"]],
    })

    edited = st.data_editor(
        editor_df,
        column_config={
            "Condition": st.column_config.TextColumn("Condition (DESeq2)", required=True),
            "Group": st.column_config.TextColumn("Group (edgeR / limma)"),
        },
        disabled=["Sample"],
        use_container_width=True,
        hide_index=True,
        key="sample_editor",
    )

    config["conditions"] = {r["Sample"]: str(r["Condition"] or "").strip() for _, r in edited.iterrows()}
    # blank groups fall back to the condition label
    config["groups"] = {
        r["Sample"]: str(r["Group"] or "").strip() or config["conditions"][r["Sample"]]
        for _, r in edited.iterrows()
    }


def render_contrast(config: ExperimentConfig):
    contrast = _current_contrast(config)
    levels = sorted({v for v in config["conditions"].values() if v})
    if len(levels) < 2:
        st.warning("Assign at least two distinct conditions to compare.")
        return

    factor = st.text_input(
        "Factor name",
        value=contrast.factor if contrast else "condition",
        help="Letters, digits and '.' only, e.g. condition or cell.type",
    )
    col_num, col_den = st.columns(2)
    with col_num:
        numerator = st.selectbox(
            "Compare",
            options=levels,
            index=levels.index(contrast.numerator) if contrast and contrast.numerator in levels else len(levels) - 1,
        )
    with col_den:
        denominator = st.selectbox(
            "Against (reference)",
            options=levels,
            index=levels.index(contrast.denominator) if contrast and contrast.denominator in levels else 0,
        )

    if numerator == denominator:
        st.warning("Pick two different conditions.")
        return
    try:
        chosen = Contrast(factor.strip() or "condition", numerator, denominator)
    except ValueError as e:
        st.error(str(e))
        return
    config["condition_name"] = chosen.condition_name
    st.caption(f"Comparison: `{config['condition_name']}`")


def run():
    st.title("Experiment Setup")

    config: ExperimentConfig = st.session_state.experiment_config
    counts = st.session_state.get("counts_df")

    if counts is None:
        st.info("No counts loaded yet, showing the default design. Import a count matrix first.")

    col1, col2 = st.columns(2)

    # --- Sample Design ---
    with col1:
        st.subheader("Samples")
        render_sample_table(config)

    # --- Contrast ---
    with col2:
        st.subheader("Contrast")
        render_contrast(config)

    # --- Thresholds ---
    st.divider()
    st.subheader("Filtering and display thresholds")
    col_filter, col_top, col_volcano, col_venn = st.columns(4)

    with col_filter:
        config["count_filter"] = int(st.number_input(
            "DESeq2 minimum total count", min_value=0, value=int(config["count_filter"]), step=1
        ))
    with col_top:
        config["top_n"] = int(st.number_input(
            "Top-N genes per package", min_value=1, value=int(config["top_n"]), step=100
        ))
    with col_volcano:
        config["volcano_threshold"] = float(st.number_input(
            "Volcano padj cut", min_value=0.0, max_value=1.0, value=float(config["volcano_threshold"]), format="%.1e"
        ))
    with col_venn:
        config["venn_padj"] = float(st.number_input(
            "Venn padj cut", min_value=0.0, max_value=1.0, value=float(config["venn_padj"]), format="%.3f"
        ))

    # --- Validation Checklist ---
    with st.expander("Analysis Checklist", expanded=True):
        errors = validate_config(config)
        counts_ok = counts is not None and not counts.empty

        st.checkbox("Count matrix loaded", value=counts_ok, disabled=True)
        st.checkbox("Design is complete", value=not errors, disabled=True)
        for error in errors:
            st.markdown(f"• {error}")

        if counts_ok and not errors:
            st.success("Setup looks good!")
            contrast = Contrast.from_condition_name(config["condition_name"])
            n_num = sum(1 for v in config["conditions"].values() if v == contrast.numerator)
            n_den = sum(1 for v in config["conditions"].values() if v == contrast.denominator)
            st.markdown(
                f"""Differential expression of **{counts.shape[0]} genes** will be tested with DESeq2, edgeR and limma-voom,
                comparing **{contrast.numerator}** ({n_num} samples) against **{contrast.denominator}** ({n_den} samples).
                DESeq2 drops genes with fewer than **{config['count_filter']}** total reads; edgeR and limma use `filterByExpr`."""
            )
            st.page_link("interface/plot_viewer.py", label="→ Go to Analysis", icon="📊", use_container_width=True)
        else:
            st.info("Complete all required items before analysis.")

    if st.button("Reset All Config", type="primary", use_container_width=True):
        clear_all_config_dialog()


run()
