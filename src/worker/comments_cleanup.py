# src/worker/comments_cleanup.py
"""
Ночная очистка комментариев.
Раз в сутки в заданное локальное время удаляет все комментарии.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from typing import Callable

from src.common.constants import TypeMsg
from src.common.logger import log_error, log_info
from src.core.comments.service import CommentService
from src.worker.base import BaseWorker


def seconds_until(now: datetime, hour: int, minute: int) -> float:
    """
    Секунды до ближайшего наступления hour:minute.
    Если это время сегодня уже прошло (или наступило ровно сейчас), берётся завтрашнее.
    """
    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


class CommentsCleanupWorker(BaseWorker):
    """Удаляет все комментарии ежедневно (по умолчанию в 00:00)."""

    def __init__(
        self,
        comment_service: CommentService,
        hour: int = 0,
        minute: int = 0,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__()
        self._service = comment_service
        self._hour = hour
        self._minute = minute
        self._clock = clock

    @property
    def name(self) -> str:
        return "comments_cleanup"

    async def run_forever(self) -> None:
        await log_info(
            f"Очистка комментариев запланирована ежедневно на {self._hour:02d}:{self._minute:02d}",
            type_msg=TypeMsg.INFO,
        )
        while self._running:
            await asyncio.sleep(seconds_until(self._clock(), self._hour, self._minute))
            await self.run_once()

    async def run_once(self) -> int:
        """
        Одна очистка. Ошибка БД логируется, цикл продолжается.

        Returns:
            Число удалённых комментариев (0 при ошибке)
        """
        try:
            return await self._service.purge_all()
        except Exception as e:
            await log_error(f"Не удалось удалить комментарии: {e}")
            return 0
