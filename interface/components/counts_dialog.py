# interface/components/counts_dialog.py

import streamlit as st


@st.dialog("Import Count Matrix", width="large")
def show_counts_import_dialog():
    uploaded = st.file_uploader(
        "Upload a tab-separated count matrix (.tsv/.txt)",
        type=["tsv", "txt", "tab"],
    )

    if uploaded:
        st.session_state["uploaded_counts_file"] = uploaded
        st.success(f"{uploaded.name} stored for import.")

    if st.button("Confirm upload"):
        st.rerun()
