# src/core/calls/models.py
"""
Модели истории вызовов.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CallRecord(BaseModel):
    """Запись о вызове машины гражданином."""

    id: int
    user_id: int = Field(..., alias="userId")
    user_name: Optional[str] = Field(None, alias="userName")
    called_at: datetime = Field(..., alias="calledAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class CallCreateDTO(BaseModel):
    """DTO регистрации вызова."""

    user_id: int = Field(..., alias="userId", gt=0)

    class Config:
        populate_by_name = True
