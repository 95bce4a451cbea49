"""
HR Database page: search HR contacts and add new ones together with the
questions they asked.
"""

import logging
import streamlit as st

from services.common import filter_hr_entries, missing_fields
from services.persistence import PersistenceError
from services.state_store import AppState
from ui.components import render_page_header, render_loading, render_hr_entry_card, run_async

logger = logging.getLogger(__name__)

HR_REQUIRED = ["da_name", "company_name", "hr_name", "hr_contact"]


def add_failure_message(error: PersistenceError) -> str:
    """
    Message for a failed add. When the entry itself was written, say so,
    so the user does not submit it a second time.
    """
    if error.inserted:
        return (
            "HR entry was saved, but its questions could not be added. "
            "Do not submit the entry again."
        )
    return "Failed to add HR entry. Please try again."


def _reset_form():
    st.session_state["hr_question_count"] = 1
    st.session_state["hr_form_version"] = st.session_state.get("hr_form_version", 0) + 1


def render_hr_form(store: AppState):
    """
    Add-entry form. The question list grows with the '+' button; every
    question box is submitted, empty ones included.
    """
    st.session_state.setdefault("hr_question_count", 1)
    version = st.session_state.get("hr_form_version", 0)

    st.subheader("Add New HR Entry")
    form_data = {
        "da_name": st.text_input("DA Name", key=f"hr_da_name_{version}"),
        "company_name": st.text_input("Company Name", key=f"hr_company_name_{version}"),
        "hr_name": st.text_input("HR Name", key=f"hr_hr_name_{version}"),
        "hr_contact": st.text_input("HR Contact", key=f"hr_hr_contact_{version}"),
    }

    st.markdown("**Questions**")
    questions = []
    for idx in range(st.session_state["hr_question_count"]):
        questions.append(
            st.text_input(
                f"Question {idx + 1}",
                key=f"hr_question_{version}_{idx}",
                placeholder=f"Question {idx + 1}",
                label_visibility="collapsed",
            )
        )
    if st.button("+", key="hr_add_question", help="Add another question"):
        st.session_state["hr_question_count"] += 1
        st.rerun()

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Cancel", key="hr_cancel"):
            st.session_state["show_hr_form"] = False
            _reset_form()
            st.rerun()
    with col2:
        submitted = st.button("Add Entry", key="hr_submit", type="primary")

    if not submitted:
        return

    missing = missing_fields(form_data, HR_REQUIRED)
    if missing:
        st.warning(f"Please fill in: {', '.join(missing)}")
        return

    try:
        run_async(store.add_hr_entry({**form_data, "questions": questions}))
    except PersistenceError as e:
        logger.error(f"Error adding HR entry: {e}")
        st.error(add_failure_message(e))
        if e.inserted:
            # The entry exists; a resubmit would duplicate it.
            st.session_state["show_hr_form"] = False
            _reset_form()
        return

    st.session_state["show_hr_form"] = False
    _reset_form()
    st.session_state["hr_flash"] = "HR entry added successfully!"
    st.rerun()


def render_hr_database(store: AppState):
    if store.loading:
        render_loading("HR database")
        return

    col1, col2 = st.columns([4, 1])
    with col1:
        render_page_header("HR Database", "Search HR contacts and Add HR Contacts")
    with col2:
        if st.button("Add HR Entry", key="hr_show_form"):
            st.session_state["show_hr_form"] = True

    flash = st.session_state.pop("hr_flash", None)
    if flash:
        st.success(flash)

    search_term = st.text_input(
        "Search",
        placeholder="Search by company name, HR name, or phone number...",
        key="hr_search",
        label_visibility="collapsed",
    )

    if st.session_state.get("show_hr_form"):
        with st.container(border=True):
            render_hr_form(store)

    filtered_entries = filter_hr_entries(store.hr_entries, search_term)
    if not filtered_entries:
        st.info("No HR entries found")
        return

    columns = st.columns(3)
    for i, entry in enumerate(filtered_entries):
        with columns[i % 3]:
            render_hr_entry_card(entry)
