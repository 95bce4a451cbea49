"""
Jobs page: job openings shared by DAs.
"""

import logging
import pandas as pd
import streamlit as st

from services.common import filter_jobs, missing_fields, format_created_at
from services.persistence import PersistenceError
from services.state_store import AppState
from ui.components import render_page_header, render_loading, run_async

logger = logging.getLogger(__name__)

JOB_REQUIRED = ["da_name", "company_name", "job_link"]


def render_job_form(store: AppState):
    with st.form("add_job_form", clear_on_submit=True):
        st.subheader("Add Job Opening")
        da_name = st.text_input("DA Name")
        company_name = st.text_input("Company Name")
        job_link = st.text_input("Job Link")
        phone_number = st.text_input("Phone Number (optional)")
        uploaded = st.file_uploader("Attachment (optional)")
        submitted = st.form_submit_button("Add Job")

    if not submitted:
        return

    job = {
        "da_name": da_name,
        "company_name": company_name,
        "job_link": job_link,
        # Blank optional fields are stored as absent, not as "".
        "phone_number": phone_number.strip() or None,
        "file_name": uploaded.name if uploaded else None,
    }
    missing = missing_fields(job, JOB_REQUIRED)
    if missing:
        st.warning(f"Please fill in: {', '.join(missing)}")
        return

    try:
        run_async(store.add_job(job))
        st.success("Job opening added successfully!")
    except PersistenceError as e:
        # The store has already shown its own failure notice.
        logger.error(f"Error adding job: {e}")


def render_jobs(store: AppState):
    if store.loading:
        render_loading("jobs")
        return

    render_page_header("Job Openings", "Share job openings and find them again")

    with st.expander("Add Job Opening"):
        render_job_form(store)

    search_term = st.text_input(
        "Search",
        placeholder="Search by company, DA name, or phone number...",
        key="job_search",
        label_visibility="collapsed",
    )
    jobs = filter_jobs(store.jobs, search_term)
    if not jobs:
        st.info("No job openings found")
        return

    df = pd.DataFrame(jobs)
    df["created_at"] = df["created_at"].map(format_created_at)
    df = df[["company_name", "da_name", "phone_number", "job_link", "file_name", "created_at"]]
    st.dataframe(
        df,
        hide_index=True,
        use_container_width=True,
        column_config={
            "company_name": "Company",
            "da_name": "DA",
            "phone_number": "Phone",
            "job_link": st.column_config.LinkColumn("Link"),
            "file_name": "File",
            "created_at": "Added",
        },
    )
