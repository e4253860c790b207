# src/core/calls/__init__.py
"""
История вызовов машины скорой помощи.
"""

from src.core.calls.models import CallCreateDTO, CallRecord
from src.core.calls.repository import CallRepository
from src.core.calls.service import CallService

__all__ = [
    "CallCreateDTO",
    "CallRecord",
    "CallRepository",
    "CallService",
]
