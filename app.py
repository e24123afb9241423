"""
RouteMethod — Streamlit UI entry point.
"""

import streamlit as st

# Load .env first so updated API keys are used
from routemethod.utils.config import load_config, log_file, log_level
load_config()

from routemethod.domains.trip_form import TripFormError
from routemethod.orchestration.session import PHASE_INPUT, PlanningSession
from routemethod.ui.chat_display import (
    inject_styles,
    input_placeholder,
    render_history,
    render_place_panel,
    render_question_helper,
    render_refinement_counter,
    render_trip_form,
    stream_into,
)
from routemethod.utils.logger import get_logger, setup_logger

setup_logger("routemethod", level=log_level(), log_file=log_file())
log = get_logger()

st.set_page_config(page_title="RouteMethod — Travel, Engineered.", layout="centered")
inject_styles()

if "session" not in st.session_state:
    st.session_state.session = PlanningSession()
if "last_debug_error" not in st.session_state:
    st.session_state.last_debug_error = None

session: PlanningSession = st.session_state.session

with st.sidebar:
    st.header("RouteMethod")
    st.caption("Travel, Engineered.")
    render_refinement_counter(session)
    st.subheader("Saved places")
    render_place_panel(session)
    with st.expander("Debug & settings"):
        if st.session_state.last_debug_error:
            st.error("The last reply failed:")
            st.code(st.session_state.last_debug_error, language="text")
        else:
            st.caption("No error recorded.")
        st.divider()
        if st.button("Clear chat", key="sidebar_clear_chat", use_container_width=True):
            session.clear()
            st.session_state.last_debug_error = None
            st.rerun()

if not session.started:
    st.title("Plan with intention.")
    st.write(
        "Paste your saved places. Answer a few questions. Walk away with a structured, "
        "day-by-day itinerary built around your trip — not a generic template."
    )
    if st.button("Begin planning", type="primary"):
        session.start()
        log.info("Planning session started")
        st.rerun()
    st.caption("No account required to start.")
    st.stop()

render_history(session)

# Reply to whatever the user just sent (rendered above) before taking new input.
if session.awaiting_reply:
    with st.chat_message("assistant"):
        with st.spinner("Planning…"):
            stream_into(st.empty(), session)
    st.session_state.last_debug_error = session.last_error
    st.rerun()

if session.phase == PHASE_INPUT and session.trip_data is None:
    with st.expander("Trip details form", expanded=True):
        trip = render_trip_form()
    if trip is not None:
        try:
            session.submit_trip(trip)
        except TripFormError as e:
            st.error(str(e))
        else:
            st.rerun()

answers = render_question_helper(session)
if answers and session.add_user_message(answers):
    st.rerun()

if session.refinement_limit_reached:
    st.caption("Your itinerary is complete. Export it above to save.")
else:
    text_input = st.chat_input(input_placeholder(session))
    if text_input:
        session.add_user_message(text_input)
        st.rerun()
