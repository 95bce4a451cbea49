"""
Unit tests for the SQLAlchemy persistence backend.
"""

import pytest

from services.persistence import PersistenceError


class TestSqlInsert:
    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_created_at(self, sql_service):
        rows = await sql_service.insert(
            "jobs",
            [{"da_name": "A", "company_name": "Acme", "job_link": "https://acme.test/jobs/1",
              "phone_number": None, "file_name": None}],
        )
        assert len(rows) == 1
        assert rows[0]["id"]
        assert isinstance(rows[0]["created_at"], str)
        assert rows[0]["phone_number"] is None

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_ignored(self, sql_service):
        rows = await sql_service.insert(
            "questions", [{"id": "mine", "text": "Why?", "topic": "", "asked_by": ""}]
        )
        assert rows[0]["id"] != "mine"

    @pytest.mark.asyncio
    async def test_unknown_column_raises_persistence_error(self, sql_service):
        with pytest.raises(PersistenceError) as exc_info:
            await sql_service.insert("questions", [{"text": "Q", "colour": "red"}])
        assert isinstance(exc_info.value.cause, TypeError)

    @pytest.mark.asyncio
    async def test_missing_required_column_raises_and_writes_nothing(self, sql_service):
        with pytest.raises(PersistenceError):
            await sql_service.insert("answers", [{"question_id": "q1", "answered_by": "A"}])
        assert await sql_service.select("answers") == []

    @pytest.mark.asyncio
    async def test_unknown_table(self, sql_service):
        with pytest.raises(PersistenceError):
            await sql_service.insert("candidates", [{"name": "x"}])

    @pytest.mark.asyncio
    async def test_orphan_answer_is_accepted(self, sql_service):
        rows = await sql_service.insert(
            "answers", [{"question_id": "does-not-exist", "answer_text": "Yes", "answered_by": "A"}]
        )
        assert rows[0]["question_id"] == "does-not-exist"


class TestSqlSelect:
    @pytest.mark.asyncio
    async def test_filter_and_order(self, sql_service):
        for text in ["first", "second", "third"]:
            await sql_service.insert("questions", [{"text": text, "topic": "t", "asked_by": ""}])
        await sql_service.insert("questions", [{"text": "other", "topic": "x", "asked_by": ""}])

        rows = await sql_service.select(
            "questions", filters={"topic": "t"}, order_by="created_at", descending=True
        )
        assert [r["text"] for r in rows] == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_invalid_filter_column(self, sql_service):
        with pytest.raises(PersistenceError):
            await sql_service.select("jobs", filters={"salary": 1})


class TestSqlInsertLinked:
    @pytest.mark.asyncio
    async def test_children_get_parent_id(self, sql_service):
        parent, children = await sql_service.insert_linked(
            "hr_entries",
            {"da_name": "A", "company_name": "Acme", "hr_name": "Bob", "hr_contact": "555-0100"},
            "questions",
            [{"text": "One", "topic": "", "asked_by": ""}, {"text": "", "topic": "", "asked_by": ""}],
            "hr_entry_id",
        )
        assert [c["hr_entry_id"] for c in children] == [parent["id"], parent["id"]]
        assert [c["text"] for c in children] == ["One", ""]

    @pytest.mark.asyncio
    async def test_failed_child_rolls_back_parent(self, sql_service):
        with pytest.raises(PersistenceError):
            await sql_service.insert_linked(
                "hr_entries",
                {"da_name": "A", "company_name": "Acme", "hr_name": "Bob", "hr_contact": "555-0100"},
                "questions",
                [{"text": None, "topic": "", "asked_by": ""}],
                "hr_entry_id",
            )
        assert await sql_service.select("hr_entries") == []
        assert await sql_service.select("questions") == []
