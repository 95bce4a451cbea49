"""
Questions & Answers page: record interview questions, answer them and
search what has been collected so far.
"""

import logging
import streamlit as st

from services.common import filter_questions, missing_fields, create_searchbox, format_created_at
from services.persistence import PersistenceError
from services.state_store import AppState
from ui.components import render_page_header, render_loading, run_async

logger = logging.getLogger(__name__)


def render_question_form(store: AppState):
    with st.form("add_question_form", clear_on_submit=True):
        st.subheader("Add Question")
        form_data = {
            "text": st.text_area("Question"),
            "topic": st.text_input("Topic"),
            "asked_by": st.text_input("Asked By"),
        }
        submitted = st.form_submit_button("Add Question")

    if not submitted:
        return
    if missing_fields(form_data, ["text"]):
        st.warning("Please enter the question text.")
        return
    try:
        run_async(store.add_question(form_data))
        st.success("Question added successfully!")
    except PersistenceError as e:
        logger.error(f"Error adding question: {e}")
        st.error("Failed to add question. Please try again.")


def render_answer_form(store: AppState):
    st.subheader("Add Answer")
    question_id = create_searchbox(
        label="Question",
        placeholder="Type to find a question...",
        key="answer_question_search",
        data=store.questions,
        display_fn=lambda q: f"{q.get('text', '')} ({q.get('id', '')[:8]})",
        return_fn=lambda q: q.get("id"),
    )
    with st.form("add_answer_form", clear_on_submit=True):
        form_data = {
            "answer_text": st.text_area("Answer"),
            "answered_by": st.text_input("Answered By"),
        }
        submitted = st.form_submit_button("Add Answer")

    if not submitted:
        return
    form_data["question_id"] = question_id
    missing = missing_fields(form_data, ["question_id", "answer_text", "answered_by"])
    if missing:
        st.warning(f"Please fill in: {', '.join(missing)}")
        return
    try:
        run_async(store.add_answer(form_data))
        st.success("Answer added successfully!")
    except PersistenceError as e:
        logger.error(f"Error adding answer: {e}")
        st.error("Failed to add answer. Please try again.")


def render_questions(store: AppState):
    if store.loading:
        render_loading("questions")
        return

    render_page_header("Interview Questions", "Questions asked by HR and the answers DAs gave")

    tab1, tab2 = st.tabs(["Browse", "Add"])
    with tab2:
        render_question_form(store)
        st.markdown("---")
        render_answer_form(store)

    with tab1:
        search_term = st.text_input(
            "Search",
            placeholder="Search by question, topic, or who asked...",
            key="question_search",
            label_visibility="collapsed",
        )
        questions = filter_questions(store.questions, search_term)
        if not questions:
            st.info("No questions found")
            return

        answers_by_question = {}
        for a in store.answers:
            answers_by_question.setdefault(a.get("question_id"), []).append(a)

        for q in questions:
            answers = answers_by_question.get(q.get("id"), [])
            title = f"**{q.get('text', '')}** | {len(answers)} answer(s)"
            with st.expander(title):
                st.caption(
                    f"Topic: {q.get('topic') or 'N/A'} | Asked by: {q.get('asked_by') or 'N/A'} | "
                    f"{format_created_at(q.get('created_at'))}"
                )
                if not answers:
                    st.write("No answers yet.")
                for a in answers:
                    st.markdown(f"**{a.get('answered_by', '')}:** {a.get('answer_text', '')}")
