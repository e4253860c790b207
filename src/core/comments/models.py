# src/core/comments/models.py
"""
Модели комментариев к машине.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Comment(BaseModel):
    """Комментарий с данными автора из users."""

    id: int
    user_id: int = Field(..., alias="userId")
    ambulance_id: int = Field(..., alias="ambulanceId")
    content: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    emoticon_code: Optional[str] = Field(None, alias="emoticonCode")
    parent_id: Optional[int] = Field(None, alias="parentId")
    created_at: datetime = Field(..., alias="createdAt")
    username: Optional[str] = None
    is_admin: bool = Field(False, alias="isAdmin")

    class Config:
        from_attributes = True
        populate_by_name = True


class CommentCreateDTO(BaseModel):
    """DTO создания комментария."""

    user_id: int = Field(..., alias="userId", gt=0)
    ambulance_id: int = Field(..., alias="ambulanceId", gt=0)
    content: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    emoticon_code: Optional[str] = Field(None, alias="emoticonCode")
    parent_id: Optional[int] = Field(None, alias="parentId")

    class Config:
        populate_by_name = True


class CommentsPage(BaseModel):
    """Страница комментариев."""

    page: int
    limit: int
    total: int
    comments: list[Comment]
