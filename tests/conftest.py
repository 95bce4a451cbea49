"""
Shared fixtures.

Every test gets its own SQLite file so the worker threads used by the SQL
backend all see the same database.
"""

import pytest

from db.session import Base, build_engine, build_session_factory
from services.persistence import PersistenceError
from services.sql_persistence import SqlPersistenceService, init_db
from services.state_store import AppState


@pytest.fixture
def session_factory(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield build_session_factory(engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def sql_service(session_factory):
    return SqlPersistenceService(session_factory)


class FailingService(SqlPersistenceService):
    """SQL backend that fails selected operations on selected tables."""

    def __init__(self, session_factory, fail_select=(), fail_insert=()):
        super().__init__(session_factory)
        self.fail_select = set(fail_select)
        self.fail_insert = set(fail_insert)
        self.insert_calls = []

    async def select(self, table, filters=None, order_by=None, descending=False):
        if table in self.fail_select:
            raise PersistenceError(f"select {table} failed", cause=ConnectionError("boom"))
        return await super().select(table, filters, order_by, descending)

    async def insert(self, table, rows):
        self.insert_calls.append((table, rows))
        if table in self.fail_insert:
            raise PersistenceError(f"insert {table} failed", cause=ConnectionError("boom"))
        return await super().insert(table, rows)

    async def insert_linked(self, parent_table, parent_row, child_table, child_rows, foreign_key):
        # Use the two-step path so each insert can fail on its own.
        return await super(SqlPersistenceService, self).insert_linked(
            parent_table, parent_row, child_table, child_rows, foreign_key
        )


@pytest.fixture
def failing_service_factory(session_factory):
    def _make(**kwargs):
        return FailingService(session_factory, **kwargs)
    return _make


@pytest.fixture
def store(sql_service):
    return AppState(sql_service)
