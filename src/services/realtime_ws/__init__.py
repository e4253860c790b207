# src/services/realtime_ws/__init__.py
"""
Realtime WebSocket Gateway.

Обеспечивает:
- WebSocket соединения для клиентов
- Глобальные и адресные push-события
- Переключение трекинга из админ-клиента
"""

from src.services.realtime_ws.connection_manager import ConnectionManager

__all__ = [
    "ConnectionManager",
]
