# src/core/geo/__init__.py
"""
Geo-сервис.
Обратное геокодирование координат машины через OpenStreetMap Nominatim.
"""

from src.core.geo.service import GeoService

__all__ = [
    "GeoService",
]
