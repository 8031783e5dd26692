# interface/backend/session.py

import streamlit as st

from interface.backend.session_schema import default_experiment_config


def initialize_session_state():
    defaults = {
        "experiment_config": default_experiment_config(),
        "counts_df": None,
        "de_results": None,
    }

    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


@st.dialog("Restart Session")
def session_restart_dialog():
    st.error("This will clear the loaded counts, configuration and results.")
    if st.button("Confirm Reset", type="primary"):
        st.session_state.clear()
        st.rerun()


def session_restart_button():
    if st.button("Restart", type="primary", icon=":material/restart_alt:", use_container_width=True):
        session_restart_dialog()
