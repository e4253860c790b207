# src/core/ambulance/__init__.py
"""
Местоположение машины скорой помощи.
"""

from src.core.ambulance.models import AmbulanceLocation, LocationUpdateDTO
from src.core.ambulance.repository import AmbulanceRepository
from src.core.ambulance.service import AmbulanceService

__all__ = [
    "AmbulanceLocation",
    "LocationUpdateDTO",
    "AmbulanceRepository",
    "AmbulanceService",
]
