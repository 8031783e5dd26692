# interface/plotting/utils.py

import streamlit as st
import pandas as pd
from typing import Optional

from de_pipeline.types import PACKAGES


def render_plot_data_tables(df: pd.DataFrame, label: str, sort_by: Optional[str] = None):
    with st.expander(f"Show {label} Values"):
        if df is None:
            st.warning("Could not display raw data: no DataFrame provided.")
            return

        if "package" not in df.columns:
            _render_facet_table(df, "All Data", sort_by)
            return

        for package in PACKAGES:
            _render_facet_table(df[df["package"] == package], package, sort_by)


def _render_facet_table(df: pd.DataFrame, label: str, sort_by: Optional[str]):
    df_display = df.drop(columns=["package"], errors="ignore").copy()
    if sort_by and sort_by in df_display.columns:
        df_display = df_display.sort_values(by=sort_by, na_position="last")

    st.markdown(f"**Facet: `{label}`** ({len(df_display)} genes)")
    if not df_display.empty:
        st.dataframe(df_display, use_container_width=True)
    else:
        st.caption("*(empty)*")
