# src/common/exceptions.py
"""
Доменные исключения.
Сервисы бросают их, HTTP-слой превращает в ответы с нужным статусом.
"""

from __future__ import annotations

from typing import Any


class DispatchError(Exception):
    """Базовое исключение доменного слоя."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DispatchError):
    """Некорректные входные данные (400)."""

    status_code = 400
    error_code = "validation_error"


class NotFoundError(DispatchError):
    """Запрошенная запись не существует (404)."""

    status_code = 404
    error_code = "not_found"


class TrackingDisabledError(DispatchError):
    """
    Запись координат отклонена: трекинг выключен и нет admin-override (423).

    Это конфликт состояния, а не ошибка ввода: клиент должен
    повторить позже или получить разрешение.
    """

    status_code = 423
    error_code = "tracking_disabled"

    def __init__(self) -> None:
        super().__init__(
            "Ambulance tracking is currently disabled",
            details={
                "trackingActive": False,
                "message": "Please enable tracking first before updating location",
            },
        )
