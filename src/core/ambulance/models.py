# src/core/ambulance/models.py
"""
Модели данных местоположения машины.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AmbulanceLocation(BaseModel):
    """Единственная запись о местоположении машины (id = 1)."""

    latitude: float = Field(..., description="Широта")
    longitude: float = Field(..., description="Долгота")
    is_busy: bool = Field(False, alias="isBusy", description="Машина на вызове")
    address_text: Optional[str] = Field(None, alias="addressText", description="Адрес по координатам")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="Время последнего изменения")

    class Config:
        from_attributes = True
        populate_by_name = True

    def to_payload(self, tracking_active: bool) -> dict:
        """Тело события ambulanceLocationUpdated и ответов API."""
        payload = self.model_dump(by_alias=True, mode="json")
        payload["trackingActive"] = tracking_active
        return payload


class LocationUpdateDTO(BaseModel):
    """DTO записи координат."""

    latitude: float
    longitude: float
    is_busy: Optional[bool] = Field(None, alias="isBusy")

    class Config:
        populate_by_name = True
