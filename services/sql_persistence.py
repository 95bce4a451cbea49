"""
SQLAlchemy-backed Persistence Service.

Sessions are blocking, so each call runs in a worker thread and the event
loop only waits on it.
"""

from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
import asyncio
import contextlib

from db.session import Base, SessionLocal
from models.hr_entry import HREntry
from models.question import Question
from models.answer import Answer
from models.job import Job
from services.persistence import PersistenceError, PersistenceService, Row, check_table

MODELS = {
    "hr_entries": HREntry,
    "questions": Question,
    "answers": Answer,
    "jobs": Job,
}


def to_row(record: Base) -> Row:
    """Convert an ORM instance to a plain dict; timestamps become ISO strings."""
    row = {}
    for column in record.__table__.columns:
        value = getattr(record, column.name)
        if isinstance(value, datetime):
            value = value.isoformat()
        row[column.name] = value
    return row


def _build(table: str, row: Row) -> Base:
    model = MODELS[table]
    # id and created_at belong to the database, never to the caller.
    values = {k: v for k, v in row.items() if k not in ("id", "created_at")}
    return model(**values)


class SqlPersistenceService(PersistenceService):
    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    async def _run(self, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except PersistenceError:
            raise
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Database operation failed: {exc}", cause=exc) from exc

    # --- select ---

    def _select(self, table, filters, order_by, descending) -> List[Row]:
        model = MODELS[table]
        with contextlib.closing(self.session_factory()) as db:
            query = db.query(model)
            for name, value in (filters or {}).items():
                column = getattr(model, name, None)
                if column is None:
                    raise ValueError(f"Invalid filter column: {name}")
                query = query.filter(column == value)
            if order_by:
                column = getattr(model, order_by, None)
                if column is None:
                    raise ValueError(f"Invalid order column: {order_by}")
                query = query.order_by(column.desc() if descending else column.asc())
            return [to_row(r) for r in query.all()]

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Row]:
        check_table(table)
        return await self._run(self._select, table, filters, order_by, descending)

    # --- insert ---

    def _insert(self, table: str, rows: List[Row]) -> List[Row]:
        with contextlib.closing(self.session_factory()) as db:
            try:
                records = [_build(table, row) for row in rows]
                db.add_all(records)
                db.commit()
                for r in records:
                    db.refresh(r)
                return [to_row(r) for r in records]
            except Exception:
                db.rollback()
                raise

    async def insert(self, table: str, rows: List[Row]) -> List[Row]:
        check_table(table)
        return await self._run(self._insert, table, rows)

    def _insert_linked(self, parent_table, parent_row, child_table, child_rows, foreign_key):
        with contextlib.closing(self.session_factory()) as db:
            try:
                parent = _build(parent_table, parent_row)
                db.add(parent)
                db.flush()  # assigns parent.id
                children = [
                    _build(child_table, {**row, foreign_key: parent.id}) for row in child_rows
                ]
                db.add_all(children)
                db.commit()
                db.refresh(parent)
                for c in children:
                    db.refresh(c)
                return to_row(parent), [to_row(c) for c in children]
            except Exception:
                db.rollback()
                raise

    async def insert_linked(
        self,
        parent_table: str,
        parent_row: Row,
        child_table: str,
        child_rows: List[Row],
        foreign_key: str,
    ) -> Tuple[Row, List[Row]]:
        """Insert the parent and its children in a single transaction."""
        check_table(parent_table)
        check_table(child_table)
        return await self._run(
            self._insert_linked, parent_table, parent_row, child_table, child_rows, foreign_key
        )


def init_db(bind) -> None:
    """Ensure all tables exist."""
    Base.metadata.create_all(bind=bind)
