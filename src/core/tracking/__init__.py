# src/core/tracking/__init__.py
"""
Трекинг машины скорой помощи.
Флаг активности трекинга и решение о допуске обновлений координат.
"""

from src.core.tracking.state import TrackingStateManager
from src.core.tracking.gate import GateDecision, LocationUpdateGate
from src.core.tracking.service import TrackingService

__all__ = [
    "TrackingStateManager",
    "GateDecision",
    "LocationUpdateGate",
    "TrackingService",
]
