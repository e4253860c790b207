# src/services/dispatch_api/__init__.py
"""
Dispatch API: HTTP и WebSocket сервис диспетчерской.

Обеспечивает:
- Местоположение и статус машины, управление трекингом
- Чат граждан и диспетчеров
- Комментарии и историю вызовов
"""
