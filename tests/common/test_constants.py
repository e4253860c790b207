# tests/common/test_constants.py
"""
Тесты для модуля констант.
"""

import pytest

from src.common.constants import (
    ADMIN_UPDATE_HEADER,
    AMBULANCE_LOCATION_ID,
    ClientAction,
    MessageDirection,
    PushEvent,
    TypeMsg,
)


class TestTypeMsg:
    """Тесты для enum TypeMsg."""

    def test_type_msg_is_str_enum(self) -> None:
        assert isinstance(TypeMsg.DEBUG, str)
        assert TypeMsg.INFO == "info"


class TestPushEvent:
    """Имена событий являются частью протокола с клиентами."""

    @pytest.mark.parametrize(
        "event, name",
        [
            (PushEvent.TRACKING_STATUS, "trackingStatus"),
            (PushEvent.TRACKING_ENABLED, "ambulanceTrackingEnabled"),
            (PushEvent.TRACKING_DISABLED, "ambulanceTrackingDisabled"),
            (PushEvent.LOCATION_UPDATED, "ambulanceLocationUpdated"),
            (PushEvent.NEW_MESSAGE, "newMessage"),
            (PushEvent.MESSAGE_DELETED, "messageDeleted"),
            (PushEvent.CONVERSATION_CLEARED, "conversationCleared"),
            (PushEvent.NEW_CALL, "newCall"),
            (PushEvent.ALL_CALLS_CLEARED, "allCallsCleared"),
            (PushEvent.NEW_COMMENT, "newComment"),
        ],
    )
    def test_wire_names(self, event: PushEvent, name: str) -> None:
        assert event.value == name

    def test_names_unique(self) -> None:
        values = [event.value for event in PushEvent]
        assert len(values) == len(set(values))


def test_client_actions() -> None:
    assert ClientAction("toggleAmbulanceTracking") is ClientAction.TOGGLE_TRACKING
    assert ClientAction("join") is ClientAction.JOIN


def test_message_direction() -> None:
    assert {d.value for d in MessageDirection} == {"outgoing", "incoming"}


def test_single_location_record() -> None:
    assert AMBULANCE_LOCATION_ID == 1
    assert ADMIN_UPDATE_HEADER == "X-Admin-Update"
