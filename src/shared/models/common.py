# src/shared/models/common.py
"""
Общие модели HTTP-ответов.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой."""

    error: str
    error_code: str
    details: Any | None = None


class SuccessResponse(BaseModel):
    """Ответ на операцию без полезной нагрузки."""

    success: bool = True
    message: str | None = None


class HealthStatus(BaseModel):
    """Статус здоровья сервиса."""

    service: str
    status: str = "healthy"  # healthy, degraded
    version: str | None = None
    tracking_active: bool | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    # dependencies: {"postgres": "healthy"}
