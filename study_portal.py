import logging
import os

import streamlit as st

from config import load_settings
from dashboard.ui import (
    initialize_session_state, render_dashboard, render_login, render_quiz_player
)

logging.basicConfig(
    level=os.getenv("PORTAL_LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)


# ==========================================
# MAIN LOOP
# ==========================================

def run_portal():
    st.set_page_config(page_title="Study Portal", page_icon="🎓", layout="wide")
    initialize_session_state()
    settings = load_settings()

    student = st.session_state.current_user
    if student is None:
        render_login(settings)
    elif st.session_state.quiz_session is not None:
        render_quiz_player(settings, st.session_state.quiz_session)
    else:
        render_dashboard(settings, student)


if __name__ == "__main__":
    run_portal()
