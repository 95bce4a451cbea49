"""
Shared UI components for Streamlit pages.
"""

import asyncio
import streamlit as st
from services.common import format_created_at


def run_async(coro):
    """
    Run a store coroutine to completion from a Streamlit script run.
    """
    return asyncio.run(coro)


def render_page_header(title: str, subtitle: str):
    st.title(title)
    st.caption(subtitle)


def render_loading(what: str):
    st.info(f"Loading {what}...")


def render_hr_entry_card(entry: dict):
    with st.container(border=True):
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"#### {entry.get('hr_name', '')}")
            st.caption(f"Added by {entry.get('da_name', '')}")
        with col2:
            st.caption(format_created_at(entry.get("created_at")))

        st.write(entry.get("company_name", ""))
        st.write(entry.get("hr_contact", ""))

        questions = entry.get("questions") or []
        if questions:
            st.markdown("**Questions:**")
            st.markdown("\n".join(f"- {q.get('text', '')}" for q in questions))
