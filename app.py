"""
Main Streamlit entry point for DA Records.
This file wires the persistence backend and the per-session state store,
runs the initial load and routes between the pages in the sidebar.
"""

import logging
import os
import streamlit as st
from dotenv import load_dotenv
from db.session import engine
from services.persistence import PersistenceError, PersistenceService
from services.sql_persistence import SqlPersistenceService, init_db
from services.rest_persistence import RestPersistenceService
from services.state_store import AppState
from ui.components import run_async
import sqlalchemy
import ui.hr_database as hr_page
import ui.questions as questions_page
import ui.jobs as jobs_page

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

PERSISTENCE_BACKEND = os.getenv("PERSISTENCE_BACKEND", "sql")

PAGES = {
    "HR Database": hr_page.render_hr_database,
    "Questions & Answers": questions_page.render_questions,
    "Jobs": jobs_page.render_jobs,
}


def build_persistence(backend: str = PERSISTENCE_BACKEND) -> PersistenceService:
    """
    Returns the configured Persistence Service ('sql' or 'rest').
    """
    if backend == "rest":
        return RestPersistenceService()
    if backend == "sql":
        try:
            init_db(engine)
        except sqlalchemy.exc.SQLAlchemyError as e:
            st.error(f"Database error during initialization: {e}")
        return SqlPersistenceService()
    raise ValueError(f"Unknown PERSISTENCE_BACKEND '{backend}' (expected 'sql' or 'rest').")


def get_store() -> AppState:
    """
    One store per browser session, created on the first run and reused by every page.
    """
    if "store" not in st.session_state:
        st.session_state["store"] = AppState(build_persistence(), notify=st.error)
    return st.session_state["store"]


def load_data(store: AppState):
    try:
        report = run_async(store.refresh_data())
    except PersistenceError as e:
        logger.error(f"Failed to load HR entries: {e}")
        st.error("Could not load HR entries. Showing the last loaded data.")
        return
    failed = [name for name, result in report.items() if not result.ok]
    if failed:
        st.warning(f"Some data could not be refreshed: {', '.join(failed)}")


def main():
    st.set_page_config(page_title="DA Records", layout="wide")

    store = get_store()
    if not st.session_state.get("initial_load_done"):
        st.session_state["initial_load_done"] = True
        load_data(store)

    st.sidebar.title("DA Records")
    st.sidebar.markdown("---")
    nav_selection = st.sidebar.radio(
        "Navigation",
        list(PAGES),
        key="main_nav",
        label_visibility="collapsed",
    )
    if st.sidebar.button("Refresh Data"):
        load_data(store)

    PAGES[nav_selection](store)


if __name__ == "__main__":
    main()
