# src/services/realtime_ws/connection_manager.py
"""
Менеджер WebSocket соединений.
Глобальная рассылка, адресная доставка по группам и снимок трекинга при подключении.
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

from fastapi import WebSocket

from src.common.constants import PushEvent, TypeMsg
from src.common.logger import log_info, log_warning
from src.core.tracking.state import TrackingStateManager

# Верхняя граница ожидания одной отправки, секунды
SEND_TIMEOUT = 2.0


@dataclass
class ConnectionInfo:
    """Информация о соединении."""
    websocket: WebSocket
    client_id: str
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    addresses: set[str] = field(default_factory=set)  # ID пользователей, к чьим комнатам присоединился клиент


def envelope(event: PushEvent | str, payload: Any) -> dict[str, Any]:
    """Формат сообщения сервер -> клиент."""
    name = event.value if isinstance(event, PushEvent) else event
    return {"event": name, "data": payload}


class ConnectionManager:
    """
    Менеджер WebSocket соединений.

    Доставка best-effort: без подтверждений, повторов и гарантий порядка.
    Отправки идут параллельно, каждая ограничена send_timeout. Сокет,
    на который не удалось отправить за это время, отключается.
    Методы рассылки никогда не бросают исключений.
    """

    def __init__(self, tracking: TrackingStateManager, send_timeout: float = SEND_TIMEOUT) -> None:
        self._tracking = tracking
        self._send_timeout = send_timeout

        # client_id -> ConnectionInfo
        self._connections: dict[str, ConnectionInfo] = {}

        # address -> set of client_ids
        self._groups: dict[str, set[str]] = {}

        # Для статистики
        self._total_connections: int = 0
        self._total_messages_sent: int = 0

    @property
    def active_connections(self) -> int:
        """Количество активных соединений."""
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> str:
        """
        Принять клиента и сразу отправить ему текущее состояние трекинга.

        Returns:
            ID соединения
        """
        await websocket.accept()

        client_id = uuid.uuid4().hex
        self._connections[client_id] = ConnectionInfo(websocket=websocket, client_id=client_id)
        self._total_connections += 1

        await log_info(f"WS клиент подключён: {client_id}", type_msg=TypeMsg.DEBUG)

        await self.send_personal(
            client_id,
            PushEvent.TRACKING_STATUS,
            self._tracking.get_status(),
        )
        return client_id

    async def disconnect(self, client_id: str) -> None:
        """Отключить клиента и убрать его из всех групп."""
        conn = self._connections.pop(client_id, None)
        if conn is None:
            return

        for address in conn.addresses:
            members = self._groups.get(address)
            if members is None:
                continue
            members.discard(client_id)
            if not members:
                del self._groups[address]

        await log_info(f"WS клиент отключён: {client_id}", type_msg=TypeMsg.DEBUG)

    def join(self, client_id: str, address: int | str) -> bool:
        """
        Присоединить клиента к группе адреса. Повторный join ничего не меняет.

        Returns:
            False если клиент не подключён
        """
        conn = self._connections.get(client_id)
        if conn is None:
            return False

        key = str(address)
        conn.addresses.add(key)
        self._groups.setdefault(key, set()).add(client_id)
        return True

    async def send_personal(self, client_id: str, event: PushEvent, payload: Any) -> bool:
        """
        Отправить событие одному клиенту.

        Returns:
            True если отправлено, False если клиент не подключён или сокет упал
        """
        conn = self._connections.get(client_id)
        if conn is None:
            return False

        if await self._send(conn, envelope(event, payload)):
            return True

        await self.disconnect(client_id)
        return False

    async def broadcast_global(self, event: PushEvent, payload: Any) -> int:
        """
        Отправить событие всем подключённым клиентам.

        Returns:
            Количество успешных отправок
        """
        return await self._send_many(list(self._connections), envelope(event, payload))

    async def deliver_to_address(self, address: int | str, event: PushEvent, payload: Any) -> int:
        """Отправить событие клиентам одной группы."""
        return await self.deliver_to_addresses((address,), event, payload)

    async def deliver_to_addresses(
        self,
        addresses: Iterable[int | str],
        event: PushEvent,
        payload: Any,
    ) -> int:
        """
        Отправить событие клиентам, состоящим хотя бы в одной из групп.
        Клиент из нескольких групп получает событие один раз.
        """
        targets: set[str] = set()
        for address in addresses:
            targets |= self._groups.get(str(address), set())
        return await self._send_many(sorted(targets), envelope(event, payload))

    def get_client_addresses(self, client_id: str) -> set[str]:
        """Получить все группы клиента."""
        conn = self._connections.get(client_id)
        return conn.addresses.copy() if conn else set()

    def get_group_members(self, address: int | str) -> set[str]:
        """Получить всех клиентов группы."""
        return self._groups.get(str(address), set()).copy()

    def get_stats(self) -> dict[str, Any]:
        """Получить статистику."""
        return {
            "active_connections": len(self._connections),
            "total_groups": len(self._groups),
            "total_connections_ever": self._total_connections,
            "total_messages_sent": self._total_messages_sent,
        }

    async def _send_many(self, client_ids: list[str], message: dict[str, Any]) -> int:
        conns = [self._connections[cid] for cid in client_ids if cid in self._connections]
        if not conns:
            return 0

        results = await asyncio.gather(*(self._send(conn, message) for conn in conns))

        # Отключаем failed соединения
        failed = [conn.client_id for conn, ok in zip(conns, results) if not ok]
        for client_id in failed:
            await self.disconnect(client_id)

        return len(conns) - len(failed)

    async def _send(self, conn: ConnectionInfo, message: dict[str, Any]) -> bool:
        try:
            await asyncio.wait_for(conn.websocket.send_json(message), self._send_timeout)
        except asyncio.TimeoutError:
            await log_warning(
                f"Таймаут отправки {message.get('event')} клиенту {conn.client_id}"
            )
            return False
        except Exception as e:
            await log_warning(f"Не удалось отправить {message.get('event')} клиенту {conn.client_id}: {e}")
            return False
        self._total_messages_sent += 1
        return True
