# src/core/comments/repository.py
"""
Репозиторий комментариев.
"""

from __future__ import annotations

from typing import Optional

import asyncpg

from src.common.exceptions import NotFoundError
from src.core.comments.models import Comment
from src.infra.database import DatabaseManager, affected_rows

_COMMENT_SELECT = """
    SELECT c.id, c.user_id, c.ambulance_id, c.content, c.image_url,
           c.emoticon_code, c.parent_id, c.created_at,
           u.username, u.is_admin
    FROM comments c
    JOIN users u ON c.user_id = u.id
"""


class CommentRepository:
    """Репозиторий комментариев."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    @staticmethod
    def _row_to_comment(row) -> Comment:
        return Comment(
            id=row["id"],
            user_id=row["user_id"],
            ambulance_id=row["ambulance_id"],
            content=row["content"],
            image_url=row["image_url"],
            emoticon_code=row["emoticon_code"],
            parent_id=row["parent_id"],
            created_at=row["created_at"],
            username=row["username"],
            is_admin=row["is_admin"],
        )

    async def count(self, ambulance_id: Optional[int] = None) -> int:
        if ambulance_id is None:
            return await self._db.fetchval("SELECT COUNT(*) FROM comments")
        return await self._db.fetchval(
            "SELECT COUNT(*) FROM comments WHERE ambulance_id = $1",
            ambulance_id,
        )

    async def list_page(
        self,
        ambulance_id: Optional[int],
        limit: int,
        offset: int,
    ) -> list[Comment]:
        """Комментарии от новых к старым."""
        if ambulance_id is None:
            rows = await self._db.fetch(
                f"{_COMMENT_SELECT} ORDER BY c.created_at DESC, c.id DESC LIMIT $1 OFFSET $2",
                limit,
                offset,
            )
        else:
            rows = await self._db.fetch(
                f"""{_COMMENT_SELECT}
                WHERE c.ambulance_id = $1
                ORDER BY c.created_at DESC, c.id DESC
                LIMIT $2 OFFSET $3""",
                ambulance_id,
                limit,
                offset,
            )
        return [self._row_to_comment(row) for row in rows]

    async def get(self, comment_id: int) -> Optional[Comment]:
        row = await self._db.fetchrow(f"{_COMMENT_SELECT} WHERE c.id = $1", comment_id)
        if row is None:
            return None
        return self._row_to_comment(row)

    async def create(
        self,
        user_id: int,
        ambulance_id: int,
        content: Optional[str],
        image_url: Optional[str],
        emoticon_code: Optional[str],
        parent_id: Optional[int],
    ) -> int:
        """
        Returns:
            ID нового комментария

        Raises:
            NotFoundError: Пользователь или родительский комментарий не существует
        """
        try:
            return await self._db.fetchval(
                """
                INSERT INTO comments
                    (user_id, ambulance_id, content, image_url, emoticon_code, parent_id)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING id
                """,
                user_id,
                ambulance_id,
                content,
                image_url,
                emoticon_code,
                parent_id,
            )
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError("User or parent comment not found", details={"reason": str(e)}) from e

    async def delete(self, comment_id: int) -> bool:
        status = await self._db.execute("DELETE FROM comments WHERE id = $1", comment_id)
        return affected_rows(status) > 0

    async def delete_all(self) -> int:
        status = await self._db.execute("DELETE FROM comments")
        return affected_rows(status)
