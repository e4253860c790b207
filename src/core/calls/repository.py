# src/core/calls/repository.py
"""
Репозиторий истории вызовов.
"""

from __future__ import annotations

from typing import Optional

import asyncpg

from src.common.exceptions import NotFoundError
from src.core.calls.models import CallRecord
from src.infra.database import DatabaseManager, affected_rows

_CALL_SELECT = """
    SELECT h.id, h.user_id, u.full_name AS user_name, h.called_at
    FROM call_history h
    JOIN users u ON h.user_id = u.id
"""


class CallRepository:
    """Репозиторий истории вызовов."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    @staticmethod
    def _row_to_call(row) -> CallRecord:
        return CallRecord(
            id=row["id"],
            user_id=row["user_id"],
            user_name=row["user_name"],
            called_at=row["called_at"],
        )

    async def create(self, user_id: int) -> int:
        """
        Raises:
            NotFoundError: Пользователь не существует
        """
        try:
            return await self._db.fetchval(
                "INSERT INTO call_history (user_id) VALUES ($1) RETURNING id",
                user_id,
            )
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError("User not found", details={"userId": user_id}) from e

    async def get(self, call_id: int) -> Optional[CallRecord]:
        row = await self._db.fetchrow(f"{_CALL_SELECT} WHERE h.id = $1", call_id)
        if row is None:
            return None
        return self._row_to_call(row)

    async def list_all(self) -> list[CallRecord]:
        """Все вызовы от новых к старым."""
        rows = await self._db.fetch(f"{_CALL_SELECT} ORDER BY h.called_at DESC, h.id DESC")
        return [self._row_to_call(row) for row in rows]

    async def delete(self, call_id: int) -> bool:
        status = await self._db.execute("DELETE FROM call_history WHERE id = $1", call_id)
        return affected_rows(status) > 0

    async def delete_all(self) -> int:
        status = await self._db.execute("DELETE FROM call_history")
        return affected_rows(status)
