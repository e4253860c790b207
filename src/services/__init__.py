# src/services/__init__.py
"""
Сервисный слой: всё, что смотрит наружу.

Сервисы:
- dispatch_api: REST API диспетчерской (машина, чат, комментарии, вызовы)
- realtime_ws: WebSocket push-канал и менеджер соединений
"""

__all__: list[str] = []
