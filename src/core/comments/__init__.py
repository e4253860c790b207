# src/core/comments/__init__.py
"""
Комментарии граждан к машине скорой помощи.
"""

from src.core.comments.models import Comment, CommentCreateDTO, CommentsPage
from src.core.comments.repository import CommentRepository
from src.core.comments.service import CommentService

__all__ = [
    "Comment",
    "CommentCreateDTO",
    "CommentsPage",
    "CommentRepository",
    "CommentService",
]
