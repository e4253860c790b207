# src/core/chat/models.py
"""
Модели данных чата.
Диалог не хранится отдельно: он вычисляется из плоского журнала сообщений.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.common.constants import MessageDirection


class Message(BaseModel):
    """Сообщение чата. После создания не меняется, только удаляется."""

    id: int
    sender_id: int = Field(..., alias="senderId")
    receiver_id: int = Field(..., alias="receiverId")
    content: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    emoticon_code: Optional[str] = Field(None, alias="emoticonCode")
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True

    def partner_of(self, user_id: int) -> int:
        """ID собеседника относительно user_id (для сообщения самому себе это сам user_id)."""
        return self.receiver_id if self.sender_id == user_id else self.sender_id


class HistoryMessage(Message):
    """Сообщение в истории пары с направлением относительно запрашивающего."""

    direction: MessageDirection


class LastMessage(BaseModel):
    """Полезная нагрузка последнего сообщения диалога."""

    content: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    emoticon_code: Optional[str] = Field(None, alias="emoticonCode")

    class Config:
        populate_by_name = True


class Conversation(BaseModel):
    """Диалог с одним собеседником (производное представление)."""

    partner_id: int = Field(..., alias="partnerId")
    partner_name: Optional[str] = Field(None, alias="partnerName")
    last_message: LastMessage = Field(..., alias="lastMessage")
    last_timestamp: datetime = Field(..., alias="lastTimestamp")

    class Config:
        populate_by_name = True


class MessageCreateDTO(BaseModel):
    """DTO отправки сообщения. Пустые строки считаются отсутствующими."""

    sender_id: int = Field(..., alias="senderId")
    receiver_id: int = Field(..., alias="receiverId")
    content: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    emoticon_code: Optional[str] = Field(None, alias="emoticonCode")

    class Config:
        populate_by_name = True
