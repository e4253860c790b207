# src/core/push.py
"""
Контракт доставки push-событий.
Доменные сервисы знают только этот интерфейс, реализация живёт в src/services/realtime_ws.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol

from src.common.constants import PushEvent


class PushGateway(Protocol):
    """Доставка событий подключённым клиентам (best-effort, без подтверждений)."""

    async def broadcast_global(self, event: PushEvent, payload: Any) -> int:
        """Всем подключённым клиентам. Возвращает число доставок."""
        ...

    async def deliver_to_addresses(
        self,
        addresses: Iterable[int | str],
        event: PushEvent,
        payload: Any,
    ) -> int:
        """Клиентам, подписанным хотя бы на один из адресов."""
        ...
