"""
Persistence Service contract shared by the SQL and REST backends.

Every backend speaks in plain row dicts and raises PersistenceError for any
failure: transport, constraint or malformed row alike.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

TABLES = ("hr_entries", "questions", "answers", "jobs")

Row = Dict[str, Any]


class PersistenceError(Exception):
    """
    A remote operation failed.

    `cause` is the underlying exception. `inserted` holds rows that were
    written before the failure (the HR entry of a non-atomic linked insert).
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None, inserted: Optional[List[Row]] = None):
        super().__init__(message)
        self.cause = cause
        self.inserted = inserted or []


def check_table(table: str) -> None:
    if table not in TABLES:
        raise PersistenceError(f"Unknown table '{table}'.")


class PersistenceService:
    """
    Base class for backends.

    select(table, filters, order_by, descending) -> list of rows
    insert(table, rows) -> list of inserted rows, ids and created_at filled in
    """

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Row]:
        raise NotImplementedError

    async def insert(self, table: str, rows: List[Row]) -> List[Row]:
        raise NotImplementedError

    async def insert_linked(
        self,
        parent_table: str,
        parent_row: Row,
        child_table: str,
        child_rows: List[Row],
        foreign_key: str,
    ) -> Tuple[Row, List[Row]]:
        """
        Insert a parent row, then its children with `foreign_key` set to the parent id.

        This default issues two separate inserts. If the second one fails the
        parent stays written; the raised PersistenceError carries it in
        `inserted`. Backends with transactions override this.
        """
        inserted = await self.insert(parent_table, [parent_row])
        if len(inserted) != 1:
            raise PersistenceError(
                f"Expected one inserted row in '{parent_table}', got {len(inserted)}."
            )
        parent = inserted[0]
        if not child_rows:
            return parent, []

        children = [{**row, foreign_key: parent["id"]} for row in child_rows]
        try:
            return parent, await self.insert(child_table, children)
        except PersistenceError as exc:
            logger.error(
                "Inserted %s row %s but its %s rows failed; the parent is not rolled back.",
                parent_table, parent["id"], child_table,
            )
            raise PersistenceError(str(exc), cause=exc.cause or exc, inserted=[parent]) from exc
