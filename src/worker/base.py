# src/worker/base.py
"""
Базовый класс для фоновых воркеров.
Воркер живёт внутри процесса API как asyncio-задача.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import List

from src.common.logger import log_info, log_error
from src.common.constants import TypeMsg


class BaseWorker(ABC):
    """
    Базовый класс для всех воркеров.
    Запускает основной цикл в отдельной задаче и корректно отменяет её.
    """

    def __init__(self) -> None:
        self._running = False
        self._tasks: List[asyncio.Task] = []

    @property
    @abstractmethod
    def name(self) -> str:
        """Имя воркера."""
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    @abstractmethod
    async def run_forever(self) -> None:
        """Основной цикл воркера. Завершается отменой задачи."""
        pass

    async def start(self) -> None:
        """Запускает воркер."""
        if self._running:
            return

        self._running = True
        self._tasks.append(asyncio.create_task(self._guarded_run(), name=self.name))
        await log_info(f"Воркер {self.name} запущен", type_msg=TypeMsg.INFO)

    async def stop(self) -> None:
        """Останавливает воркер."""
        if not self._running:
            return

        self._running = False

        # Отменяем все задачи
        for task in self._tasks:
            task.cancel()

        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

        self._tasks.clear()
        await log_info(f"Воркер {self.name} остановлен", type_msg=TypeMsg.INFO)

    async def _guarded_run(self) -> None:
        try:
            await self.run_forever()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            await log_error(f"Воркер {self.name} аварийно завершился: {e}", exc_info=True)
            self._running = False
