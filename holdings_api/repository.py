"""
holdings_api/repository.py

Owner-scoped table accessor shared by every resource.

All reads and writes take the owner id explicitly and filter on it; update
and delete repeat the owner filter even after the handler's ownership lookup.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.engine import Connection

from holdings_api.dates import utcnow
from holdings_api.tenant import assert_row_scoped, assert_rows_scoped, require_owner_id


def new_id() -> str:
    return uuid.uuid4().hex


class ResourceRepository:
    """Table accessor for one resource table."""

    def __init__(self, table: Table):
        self.table = table

    @property
    def name(self) -> str:
        return self.table.name

    def list_for_owner(self, conn: Connection, owner_id: str) -> List[Dict[str, Any]]:
        """All rows owned by owner_id, newest first."""
        owner_id = require_owner_id(owner_id)
        stmt = (
            select(self.table)
            .where(self.table.c.owner_id == owner_id)
            .order_by(self.table.c.created_at.desc())
        )
        rows = [dict(row) for row in conn.execute(stmt).mappings()]
        assert_rows_scoped(rows, owner_id, label=f"{self.name}.list")
        return rows

    def count_for_owner(self, conn: Connection, owner_id: str) -> int:
        owner_id = require_owner_id(owner_id)
        stmt = select(func.count()).select_from(self.table).where(self.table.c.owner_id == owner_id)
        return int(conn.execute(stmt).scalar_one())

    def find_owned(self, conn: Connection, row_id: str, owner_id: str) -> Optional[Dict[str, Any]]:
        """
        Ownership lookup: the row only if it exists AND belongs to owner_id.
        Callers treat None as "not found" whether or not another owner has the row.
        """
        owner_id = require_owner_id(owner_id)
        stmt = select(self.table).where(
            self.table.c.id == row_id,
            self.table.c.owner_id == owner_id,
        )
        row = conn.execute(stmt).mappings().first()
        result = dict(row) if row is not None else None
        assert_row_scoped(result, owner_id, label=f"{self.name}.find_owned")
        return result

    def insert(self, conn: Connection, owner_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
        owner_id = require_owner_id(owner_id)
        now = utcnow()
        record = dict(values)
        # Ownership columns always come from the server, never from values
        record.update(id=new_id(), owner_id=owner_id, created_at=now, updated_at=now)
        conn.execute(insert(self.table).values(**record))
        return record

    def update(self, conn: Connection, row_id: str, owner_id: str, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        owner_id = require_owner_id(owner_id)
        record = {k: v for k, v in values.items() if k not in ("id", "owner_id", "created_at")}
        record["updated_at"] = utcnow()
        conn.execute(
            update(self.table)
            .where(self.table.c.id == row_id, self.table.c.owner_id == owner_id)
            .values(**record)
        )
        return self.find_owned(conn, row_id, owner_id)

    def delete(self, conn: Connection, row_id: str, owner_id: str) -> bool:
        owner_id = require_owner_id(owner_id)
        result = conn.execute(
            delete(self.table).where(self.table.c.id == row_id, self.table.c.owner_id == owner_id)
        )
        return result.rowcount > 0
