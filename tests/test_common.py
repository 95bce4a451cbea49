"""
Unit tests for the presence check and local search helpers.
"""

from services.common import (
    filter_hr_entries,
    filter_jobs,
    filter_questions,
    format_created_at,
    missing_fields,
)

ENTRIES = [
    {"id": "1", "company_name": "Acme Corp", "hr_name": "Bob Stone", "hr_contact": "555-0100"},
    {"id": "2", "company_name": "Globex", "hr_name": "Alice", "hr_contact": "+1 555 0199"},
]


class TestMissingFields:
    def test_reports_absent_and_blank(self):
        data = {"da_name": "A", "company_name": "  ", "hr_name": None}
        assert missing_fields(data, ["da_name", "company_name", "hr_name", "hr_contact"]) == [
            "company_name", "hr_name", "hr_contact",
        ]

    def test_all_present(self):
        assert missing_fields({"a": "x", "b": "y"}, ["a", "b"]) == []


class TestFilterHREntries:
    def test_empty_term_returns_all(self):
        assert filter_hr_entries(ENTRIES, "") == ENTRIES

    def test_company_and_hr_name_are_case_insensitive(self):
        assert [e["id"] for e in filter_hr_entries(ENTRIES, "acme")] == ["1"]
        assert [e["id"] for e in filter_hr_entries(ENTRIES, "ALICE")] == ["2"]

    def test_contact_is_plain_substring(self):
        assert [e["id"] for e in filter_hr_entries(ENTRIES, "0199")] == ["2"]
        assert [e["id"] for e in filter_hr_entries(ENTRIES, "555")] == ["1", "2"]

    def test_no_match(self):
        assert filter_hr_entries(ENTRIES, "Initech") == []


class TestFilterQuestionsAndJobs:
    def test_questions_match_text_topic_or_asker(self):
        questions = [
            {"id": "q1", "text": "Explain decorators", "topic": "Python", "asked_by": "Bob"},
            {"id": "q2", "text": "Why us?", "topic": "", "asked_by": "Alice"},
        ]
        assert [q["id"] for q in filter_questions(questions, "python")] == ["q1"]
        assert [q["id"] for q in filter_questions(questions, "alice")] == ["q2"]

    def test_jobs_tolerate_missing_phone(self):
        jobs = [
            {"id": "j1", "company_name": "Acme", "da_name": "A", "phone_number": None},
            {"id": "j2", "company_name": "Globex", "da_name": "B", "phone_number": "555-0100"},
        ]
        assert [j["id"] for j in filter_jobs(jobs, "555")] == ["j2"]
        assert [j["id"] for j in filter_jobs(jobs, "acme")] == ["j1"]


class TestFormatCreatedAt:
    def test_iso_timestamp(self):
        assert format_created_at("2025-03-01T10:20:30.123456") == "2025-03-01"
        assert format_created_at("2025-03-01T10:20:30+00:00") == "2025-03-01"

    def test_empty_and_garbage(self):
        assert format_created_at(None) == ""
        assert format_created_at("yesterday") == "yesterday"
