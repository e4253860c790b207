# src/core/tracking/state.py
"""
Состояние трекинга машины.
Один экземпляр на процесс, живёт в памяти и не сохраняется в БД.
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable


def _now_ms() -> int:
    """Текущее время в миллисекундах Unix epoch."""
    return int(time.time() * 1000)


class TrackingStateManager:
    """
    Хранит флаг «трекинг активен» и время последнего переключения.

    Активным считается только значение ровно True: строки, 1, None и любые
    другие объекты выключают трекинг. lastToggleTime никогда не убывает,
    даже если системные часы перевели назад.
    """

    def __init__(
        self,
        active: bool = True,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """
        Args:
            active: Начальное состояние флага
            clock: Источник времени в миллисекундах (подменяется в тестах)
        """
        self._clock = clock
        self._lock = threading.Lock()
        self._active = active is True
        self._last_toggle_time = clock()

    @property
    def last_toggle_time(self) -> int:
        return self._last_toggle_time

    def is_enabled(self) -> bool:
        """Активен ли трекинг."""
        return self._active

    def toggle(self, enabled: Any) -> bool:
        """
        Переключает трекинг.

        Args:
            enabled: Желаемое состояние, активным считается только True

        Returns:
            Новое значение флага
        """
        with self._lock:
            self._active = enabled is True
            self._last_toggle_time = max(self._last_toggle_time, self._clock())
            return self._active

    def get_status(self) -> dict[str, Any]:
        """
        Снимок состояния для API и push-событий.

        Returns:
            {"trackingActive", "lastToggleTime", "timestamp"}
        """
        with self._lock:
            active = self._active
            last_toggle = self._last_toggle_time

        return {
            "trackingActive": active,
            "lastToggleTime": last_toggle,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
