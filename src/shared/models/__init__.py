# src/shared/models/__init__.py
"""
Общие Pydantic-модели HTTP-слоя.
"""

from src.shared.models.common import (
    ErrorResponse,
    SuccessResponse,
    HealthStatus,
)

__all__ = [
    "ErrorResponse",
    "SuccessResponse",
    "HealthStatus",
]
