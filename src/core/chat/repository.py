# src/core/chat/repository.py
"""
Репозиторий сообщений чата.
"""

from __future__ import annotations

from typing import Optional

from src.core.chat.models import Message
from src.infra.database import DatabaseManager, affected_rows

_MESSAGE_COLUMNS = """
    id, sender_id, receiver_id, content, image_url,
    latitude, longitude, emoticon_code, created_at
"""


class MessageRepository:
    """Репозиторий сообщений."""

    def __init__(self, db: DatabaseManager) -> None:
        """
        Args:
            db: Менеджер базы данных (Dependency Injection)
        """
        self._db = db

    @staticmethod
    def _row_to_message(row) -> Message:
        return Message(
            id=row["id"],
            sender_id=row["sender_id"],
            receiver_id=row["receiver_id"],
            content=row["content"],
            image_url=row["image_url"],
            latitude=row["latitude"],
            longitude=row["longitude"],
            emoticon_code=row["emoticon_code"],
            created_at=row["created_at"],
        )

    async def get(self, message_id: int) -> Optional[Message]:
        row = await self._db.fetchrow(
            f"SELECT {_MESSAGE_COLUMNS} FROM messages WHERE id = $1",
            message_id,
        )
        if row is None:
            return None
        return self._row_to_message(row)

    async def list_for_user(self, user_id: int) -> list[Message]:
        """Все сообщения, где пользователь отправитель или получатель."""
        rows = await self._db.fetch(
            f"""
            SELECT {_MESSAGE_COLUMNS}
            FROM messages
            WHERE sender_id = $1 OR receiver_id = $1
            """,
            user_id,
        )
        return [self._row_to_message(row) for row in rows]

    async def list_pair(self, user_id: int, target_id: int) -> list[Message]:
        """Все сообщения между двумя пользователями по возрастанию времени."""
        rows = await self._db.fetch(
            f"""
            SELECT {_MESSAGE_COLUMNS}
            FROM messages
            WHERE (sender_id = $1 AND receiver_id = $2)
               OR (sender_id = $2 AND receiver_id = $1)
            ORDER BY created_at ASC, id ASC
            """,
            user_id,
            target_id,
        )
        return [self._row_to_message(row) for row in rows]

    async def get_partner_names(self, user_ids: list[int]) -> dict[int, Optional[str]]:
        """Полные имена пользователей. Неизвестные ID в ответ не попадают."""
        if not user_ids:
            return {}
        rows = await self._db.fetch(
            "SELECT id, full_name FROM users WHERE id = ANY($1::bigint[])",
            user_ids,
        )
        return {row["id"]: row["full_name"] for row in rows}

    async def create(
        self,
        sender_id: int,
        receiver_id: int,
        content: Optional[str],
        image_url: Optional[str],
        latitude: Optional[float],
        longitude: Optional[float],
        emoticon_code: Optional[str],
    ) -> Message:
        row = await self._db.fetchrow(
            f"""
            INSERT INTO messages
                (sender_id, receiver_id, content, image_url, latitude, longitude, emoticon_code)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING {_MESSAGE_COLUMNS}
            """,
            sender_id,
            receiver_id,
            content,
            image_url,
            latitude,
            longitude,
            emoticon_code,
        )
        return self._row_to_message(row)

    async def delete(self, message_id: int) -> bool:
        status = await self._db.execute("DELETE FROM messages WHERE id = $1", message_id)
        return affected_rows(status) > 0

    async def delete_pair(self, user_id: int, target_id: int) -> int:
        """Удаляет переписку пары в обе стороны, возвращает число удалённых строк."""
        status = await self._db.execute(
            """
            DELETE FROM messages
            WHERE (sender_id = $1 AND receiver_id = $2)
               OR (sender_id = $2 AND receiver_id = $1)
            """,
            user_id,
            target_id,
        )
        return affected_rows(status)
