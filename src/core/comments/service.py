# src/core/comments/service.py
"""
Сервис комментариев к машине.
"""

from __future__ import annotations

from typing import Optional

from src.common.constants import PushEvent, TypeMsg
from src.common.exceptions import ValidationError
from src.common.logger import log_error, log_info
from src.common.utils import clean_text
from src.core.comments.models import Comment, CommentCreateDTO, CommentsPage
from src.core.comments.repository import CommentRepository
from src.core.push import PushGateway

DEFAULT_PAGE_SIZE = 20


class CommentService:
    """Бизнес-логика комментариев. Новые комментарии рассылаются всем."""

    def __init__(self, repository: CommentRepository, push: PushGateway) -> None:
        self._repo = repository
        self._push = push

    async def list_comments(
        self,
        ambulance_id: Optional[int] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> CommentsPage:
        """
        Страница комментариев, от новых к старым.
        Некорректные page/limit заменяются значениями по умолчанию.
        """
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
        offset = (page - 1) * limit

        total = await self._repo.count(ambulance_id)
        comments = await self._repo.list_page(ambulance_id, limit, offset)
        return CommentsPage(page=page, limit=limit, total=total, comments=comments)

    async def create(self, dto: CommentCreateDTO) -> Optional[Comment]:
        """
        Создаёт комментарий и рассылает newComment.

        Raises:
            ValidationError: Нет ни текста, ни картинки, ни эмодзи
        """
        content = clean_text(dto.content)
        image_url = clean_text(dto.image_url)
        emoticon_code = clean_text(dto.emoticon_code)

        if not (content or image_url or emoticon_code):
            raise ValidationError("At least one content type (text, image, or emoticon) is required")

        comment_id = await self._repo.create(
            user_id=dto.user_id,
            ambulance_id=dto.ambulance_id,
            content=content,
            image_url=image_url,
            emoticon_code=emoticon_code,
            parent_id=dto.parent_id or None,
        )

        comment = await self._repo.get(comment_id)
        if comment is None:
            return None

        try:
            await self._push.broadcast_global(
                PushEvent.NEW_COMMENT,
                comment.model_dump(by_alias=True, mode="json"),
            )
        except Exception as e:
            await log_error(f"Ошибка рассылки комментария {comment_id}: {e}")

        return comment

    async def delete(self, comment_id: int) -> bool:
        return await self._repo.delete(comment_id)

    async def purge_all(self) -> int:
        """Удаляет все комментарии (ночная очистка)."""
        deleted = await self._repo.delete_all()
        await log_info(f"Удалено комментариев: {deleted}", type_msg=TypeMsg.INFO)
        return deleted
