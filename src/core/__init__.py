# src/core/__init__.py
"""
Доменный слой (Core Domain).
Бизнес-логика диспетчерской, доставка событий через абстракцию PushGateway.
"""

from src.core.ambulance import AmbulanceLocation, AmbulanceService
from src.core.calls import CallService
from src.core.chat import ChatService
from src.core.comments import CommentService
from src.core.tracking import LocationUpdateGate, TrackingService, TrackingStateManager

__all__ = [
    "AmbulanceLocation",
    "AmbulanceService",
    "CallService",
    "ChatService",
    "CommentService",
    "LocationUpdateGate",
    "TrackingService",
    "TrackingStateManager",
]
