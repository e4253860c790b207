# src/core/calls/service.py
"""
Сервис истории вызовов. Все изменения рассылаются всем клиентам.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from src.common.constants import PushEvent, TypeMsg
from src.common.logger import log_error, log_info
from src.core.calls.models import CallRecord
from src.core.calls.repository import CallRepository
from src.core.push import PushGateway


class CallService:
    """Бизнес-логика истории вызовов."""

    def __init__(self, repository: CallRepository, push: PushGateway) -> None:
        self._repo = repository
        self._push = push

    async def record_call(self, user_id: int) -> Optional[CallRecord]:
        """Регистрирует вызов и рассылает newCall."""
        call_id = await self._repo.create(user_id)
        call = await self._repo.get(call_id)

        await log_info(f"Вызов {call_id} от пользователя {user_id}", type_msg=TypeMsg.INFO)

        if call is not None:
            await self._broadcast(PushEvent.NEW_CALL, call.model_dump(by_alias=True, mode="json"))
        return call

    async def history(self) -> list[CallRecord]:
        return await self._repo.list_all()

    async def delete(self, call_id: int) -> None:
        await self._repo.delete(call_id)
        await self._broadcast(PushEvent.CALL_DELETED, {"id": call_id})

    async def clear(self) -> int:
        """
        Удаляет всю историю.

        Returns:
            Число удалённых записей
        """
        cleared = await self._repo.delete_all()

        await log_info(f"История вызовов очищена, удалено {cleared}", type_msg=TypeMsg.INFO)

        await self._broadcast(
            PushEvent.ALL_CALLS_CLEARED,
            {
                "success": True,
                "clearedCount": cleared,
                "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            },
        )
        return cleared

    async def _broadcast(self, event: PushEvent, payload: Any) -> None:
        try:
            await self._push.broadcast_global(event, payload)
        except Exception as e:
            await log_error(f"Ошибка рассылки {event.value}: {e}")
