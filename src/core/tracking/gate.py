# src/core/tracking/gate.py
"""
Шлюз обновления координат.
Решает, можно ли принять новую позицию машины.
"""

from __future__ import annotations

from enum import Enum

from src.common.exceptions import TrackingDisabledError
from src.core.tracking.state import TrackingStateManager


class GateDecision(str, Enum):
    """Решение шлюза."""
    ALLOW = "allow"
    DENY = "deny"


class LocationUpdateGate:
    """
    Запись координат отклоняется, только если трекинг выключен
    и запрос не помечен как административный.
    """

    def __init__(self, tracking: TrackingStateManager) -> None:
        self._tracking = tracking

    @staticmethod
    def decide(tracking_active: bool, is_admin_override: bool) -> GateDecision:
        if not tracking_active and not is_admin_override:
            return GateDecision.DENY
        return GateDecision.ALLOW

    def ensure_allowed(self, is_admin_override: bool) -> None:
        """
        Проверяет текущее состояние трекинга.

        Raises:
            TrackingDisabledError: Трекинг выключен, override не передан
        """
        decision = self.decide(self._tracking.is_enabled(), is_admin_override)
        if decision is GateDecision.DENY:
            raise TrackingDisabledError()
