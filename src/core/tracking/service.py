# src/core/tracking/service.py
"""
Переключение трекинга с оповещением клиентов.
Общая логика для REST-эндпоинта и WebSocket-действия.
"""

from __future__ import annotations

from typing import Any

from src.common.constants import PushEvent, TypeMsg
from src.common.logger import log_error, log_info
from src.core.push import PushGateway
from src.core.tracking.state import TrackingStateManager


class TrackingService:
    """Переключает флаг и рассылает ambulanceTrackingEnabled/Disabled всем клиентам."""

    def __init__(self, tracking: TrackingStateManager, push: PushGateway) -> None:
        self._tracking = tracking
        self._push = push

    def get_status(self) -> dict[str, Any]:
        return self._tracking.get_status()

    async def toggle(self, enabled: Any) -> dict[str, Any]:
        """
        Args:
            enabled: Желаемое состояние, активным считается только True

        Returns:
            Снимок состояния после переключения
        """
        active = self._tracking.toggle(enabled)
        status = self._tracking.get_status()

        await log_info(
            f"Трекинг машины {'ENABLED' if active else 'DISABLED'}",
            type_msg=TypeMsg.INFO,
        )

        event = PushEvent.TRACKING_ENABLED if active else PushEvent.TRACKING_DISABLED
        try:
            await self._push.broadcast_global(event, status)
        except Exception as e:
            await log_error(f"Ошибка рассылки состояния трекинга: {e}")

        return status
