# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class PushEvent(str, Enum):
    """События, отправляемые клиентам через WebSocket."""
    # Трекинг
    TRACKING_STATUS = "trackingStatus"
    TRACKING_ENABLED = "ambulanceTrackingEnabled"
    TRACKING_DISABLED = "ambulanceTrackingDisabled"
    TRACKING_TOGGLE_CONFIRM = "trackingToggleConfirm"
    LOCATION_UPDATED = "ambulanceLocationUpdated"

    # Чат (адресные)
    NEW_MESSAGE = "newMessage"
    MESSAGE_DELETED = "messageDeleted"
    CONVERSATION_CLEARED = "conversationCleared"

    # История вызовов
    NEW_CALL = "newCall"
    CALL_DELETED = "callDeleted"
    ALL_CALLS_CLEARED = "allCallsCleared"

    # Комментарии
    NEW_COMMENT = "newComment"

    # Служебные
    JOINED = "joined"
    PONG = "pong"
    ERROR = "error"


class ClientAction(str, Enum):
    """Действия, которые клиент присылает через WebSocket."""
    JOIN = "join"
    TOGGLE_TRACKING = "toggleAmbulanceTracking"
    PING = "ping"


class MessageDirection(str, Enum):
    """Направление сообщения относительно запрашивающего пользователя."""
    OUTGOING = "outgoing"
    INCOMING = "incoming"


# ID единственной записи о местоположении машины
AMBULANCE_LOCATION_ID = 1

# Заголовок ручного обновления координат администратором
ADMIN_UPDATE_HEADER = "X-Admin-Update"

# Адрес по умолчанию, когда обратное геокодирование не удалось
ADDRESS_NOT_AVAILABLE = "Address not available"
