# tests/core/test_tracking_state.py
"""
Тесты для состояния трекинга и шлюза обновления координат.
"""

from __future__ import annotations

import pytest

from src.common.exceptions import TrackingDisabledError
from src.core.tracking.gate import GateDecision, LocationUpdateGate
from src.core.tracking.state import TrackingStateManager


class TestTrackingToggle:
    """Тесты переключения флага."""

    @pytest.mark.parametrize(
        "enabled, expected",
        [
            (True, True),
            (False, False),
            ("true", False),
            (1, False),
            ("yes", False),
            (None, False),
            (0, False),
            ("", False),
            ({"enabled": True}, False),
        ],
    )
    def test_only_true_enables(self, tracking: TrackingStateManager, enabled, expected: bool) -> None:
        """Активным считается только значение ровно True."""
        result = tracking.toggle(enabled)

        assert result is expected
        assert tracking.is_enabled() is expected

    def test_toggle_updates_time(self, tracking: TrackingStateManager, clock) -> None:
        """Переключение обновляет lastToggleTime."""
        clock.advance(1500)

        tracking.toggle(False)

        assert tracking.last_toggle_time == clock.now

    def test_same_millisecond_keeps_equal_time(self, tracking: TrackingStateManager, clock) -> None:
        """Два переключения в одну миллисекунду дают одинаковое время."""
        tracking.toggle(False)
        first = tracking.last_toggle_time

        tracking.toggle(True)

        assert tracking.last_toggle_time == first

    def test_clock_going_backwards_is_clamped(self, tracking: TrackingStateManager, clock) -> None:
        """Перевод часов назад не уменьшает lastToggleTime."""
        clock.advance(10_000)
        tracking.toggle(False)
        before = tracking.last_toggle_time

        clock.advance(-60_000)
        tracking.toggle(True)

        assert tracking.last_toggle_time == before

    def test_initial_state_from_constructor(self, clock) -> None:
        """Начальное состояние задаётся в конструкторе."""
        assert TrackingStateManager(active=False, clock=clock).is_enabled() is False
        assert TrackingStateManager(clock=clock).is_enabled() is True


class TestTrackingStatus:
    """Тесты снимка состояния."""

    def test_status_shape(self, tracking: TrackingStateManager, clock) -> None:
        """Снимок содержит флаг, время переключения и время запроса."""
        status = tracking.get_status()

        assert status["trackingActive"] is True
        assert status["lastToggleTime"] == clock.now
        assert status["timestamp"].endswith("Z")

    def test_status_reflects_toggle(self, tracking: TrackingStateManager) -> None:
        tracking.toggle(False)

        assert tracking.get_status()["trackingActive"] is False


class TestLocationUpdateGate:
    """Тесты шлюза обновления координат."""

    @pytest.mark.parametrize(
        "active, admin, expected",
        [
            (True, False, GateDecision.ALLOW),
            (True, True, GateDecision.ALLOW),
            (False, True, GateDecision.ALLOW),
            (False, False, GateDecision.DENY),
        ],
    )
    def test_decide(self, active: bool, admin: bool, expected: GateDecision) -> None:
        assert LocationUpdateGate.decide(active, admin) is expected

    def test_ensure_allowed_raises_when_disabled(self, tracking: TrackingStateManager) -> None:
        """Выключенный трекинг без override даёт ошибку 423."""
        tracking.toggle(False)
        gate = LocationUpdateGate(tracking)

        with pytest.raises(TrackingDisabledError) as exc_info:
            gate.ensure_allowed(is_admin_override=False)

        assert exc_info.value.status_code == 423
        assert exc_info.value.details["trackingActive"] is False

    def test_ensure_allowed_admin_override(self, tracking: TrackingStateManager) -> None:
        """Admin-override пропускает запись при выключенном трекинге."""
        tracking.toggle(False)
        gate = LocationUpdateGate(tracking)

        gate.ensure_allowed(is_admin_override=True)
