import streamlit as st

from de_pipeline.logging_setup import setup_logging
from interface.backend.session import initialize_session_state, session_restart_button

st.set_page_config(page_title="DE Package Comparison", layout="wide")

__VERSION__="1.0.0"
__COMMENT__=""

setup_logging()

def main():
    initialize_session_state()

    custom_pages = {"Analysis Tools": []}

    custom_pages["Analysis Tools"].append(
        st.Page("interface/home.py", title="Home", icon=":material/info:")
    )

    custom_pages["Analysis Tools"].append(
        st.Page("interface/data_import.py", title="Count Import", icon=":material/file_present:")
    )

    custom_pages["Analysis Tools"].append(
        st.Page("interface/setup_experiment.py", title="Experiment Setup", icon=":material/tune:")
    )

    custom_pages["Analysis Tools"].append(
        st.Page("interface/plot_viewer.py", title="Plotting", icon=":material/bar_chart:")
    )

    page = st.navigation(custom_pages)
    page.run()

    st.divider()

    with st.sidebar:
        st.caption("Session Options")
        session_restart_button()

    st.divider()
    st.caption(f"de-compare v {__VERSION__}{': ' + __COMMENT__ if __COMMENT__ else ''} | DESeq2, edgeR and limma-voom via rpy2")

if __name__ == "__main__":
    main()
