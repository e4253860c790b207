# src/services/realtime_ws/routes.py
"""
WebSocket endpoint для push-канала.

Входящие сообщения:
- {"action": "join", "address": <user_id>}
- {"action": "toggleAmbulanceTracking", "enabled": <bool>}
- {"action": "ping"}
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from src.common.constants import ClientAction, PushEvent, TypeMsg
from src.common.logger import log_error, log_info
from src.core.tracking.service import TrackingService
from src.services.realtime_ws.connection_manager import ConnectionManager

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Push-канал: сразу после подключения клиент получает trackingStatus."""
    manager: ConnectionManager = websocket.app.state.connections
    tracking_service: TrackingService = websocket.app.state.tracking_service

    client_id = await manager.connect(websocket)

    try:
        while True:
            data = await websocket.receive_json()
            await handle_client_message(manager, tracking_service, client_id, data)

    except WebSocketDisconnect:
        await manager.disconnect(client_id)
    except Exception as e:
        await log_error(f"Ошибка WS клиента {client_id}: {e}")
        await manager.disconnect(client_id)


async def handle_client_message(
    manager: ConnectionManager,
    tracking_service: TrackingService,
    client_id: str,
    data: Any,
) -> None:
    """Обработать сообщение от клиента."""
    if not isinstance(data, dict):
        await manager.send_personal(client_id, PushEvent.ERROR, {"error": "Message must be a JSON object"})
        return

    action = data.get("action")

    if action == ClientAction.JOIN.value:
        address = data.get("address")
        if address is None or str(address).strip() == "":
            await manager.send_personal(client_id, PushEvent.ERROR, {"error": "address is required"})
            return
        manager.join(client_id, str(address).strip())
        await log_info(f"WS клиент {client_id} вошёл в комнату {address}", type_msg=TypeMsg.DEBUG)
        await manager.send_personal(client_id, PushEvent.JOINED, {"address": str(address).strip()})

    elif action == ClientAction.TOGGLE_TRACKING.value:
        status = await tracking_service.toggle(data.get("enabled"))
        await manager.send_personal(
            client_id,
            PushEvent.TRACKING_TOGGLE_CONFIRM,
            {"success": True, **status},
        )

    elif action == ClientAction.PING.value:
        await manager.send_personal(client_id, PushEvent.PONG, {})

    else:
        await manager.send_personal(client_id, PushEvent.ERROR, {"error": f"Unknown action: {action}"})
