# src/core/chat/service.py
"""
Сервис чата между гражданами и диспетчерами.
События доставляются адресно, только участникам переписки.
"""

from __future__ import annotations

from typing import Any, Iterable

from src.common.constants import PushEvent, TypeMsg
from src.common.exceptions import NotFoundError, ValidationError
from src.common.logger import log_error, log_info
from src.common.utils import clean_text
from src.core.chat.aggregator import aggregate_conversations, build_history
from src.core.chat.models import Conversation, HistoryMessage, Message, MessageCreateDTO
from src.core.chat.repository import MessageRepository
from src.core.push import PushGateway


class ChatService:
    """Бизнес-логика чата."""

    def __init__(self, repository: MessageRepository, push: PushGateway) -> None:
        self._repo = repository
        self._push = push

    async def list_conversations(self, user_id: int) -> list[Conversation]:
        """Последнее сообщение с каждым собеседником, самые свежие первыми."""
        messages = await self._repo.list_for_user(user_id)
        partner_ids = sorted({message.partner_of(user_id) for message in messages})
        names = await self._repo.get_partner_names(partner_ids)
        return aggregate_conversations(user_id, messages, names)

    async def history(self, user_id: int, target_id: int) -> list[HistoryMessage]:
        messages = await self._repo.list_pair(user_id, target_id)
        return build_history(user_id, messages)

    async def send(self, dto: MessageCreateDTO) -> Message:
        """
        Сохраняет сообщение и доставляет newMessage отправителю и получателю.

        Raises:
            ValidationError: Нет ни текста, ни картинки, ни координат, ни эмодзи
        """
        content = clean_text(dto.content)
        image_url = clean_text(dto.image_url)
        emoticon_code = clean_text(dto.emoticon_code)
        has_location = dto.latitude is not None and dto.longitude is not None

        if not (content or image_url or has_location or emoticon_code):
            raise ValidationError(
                "At least one of content, imageUrl, latitude+longitude, or emoticonCode must be provided"
            )

        message = await self._repo.create(
            sender_id=dto.sender_id,
            receiver_id=dto.receiver_id,
            content=content,
            image_url=image_url,
            latitude=dto.latitude if has_location else None,
            longitude=dto.longitude if has_location else None,
            emoticon_code=emoticon_code,
        )

        await log_info(
            f"Сообщение {message.id}: {message.sender_id} -> {message.receiver_id}",
            type_msg=TypeMsg.DEBUG,
        )

        await self._deliver(
            (message.receiver_id, message.sender_id),
            PushEvent.NEW_MESSAGE,
            message.model_dump(by_alias=True, mode="json"),
        )
        return message

    async def delete_message(self, message_id: int) -> Message:
        """
        Удаляет сообщение и сообщает об этом обоим участникам.

        Raises:
            NotFoundError: Сообщения не существует
        """
        message = await self._repo.get(message_id)
        if message is None:
            raise NotFoundError("Message not found")

        await self._repo.delete(message_id)

        await self._deliver(
            (message.sender_id, message.receiver_id),
            PushEvent.MESSAGE_DELETED,
            {"id": message.id},
        )
        return message

    async def clear_conversation(self, user_id: int, target_id: int) -> int:
        """
        Удаляет всю переписку пары.
        Каждый участник получает conversationCleared, где userId это он сам.

        Returns:
            Число удалённых сообщений
        """
        deleted = await self._repo.delete_pair(user_id, target_id)

        await log_info(
            f"Переписка {user_id} <-> {target_id} очищена, удалено {deleted}",
            type_msg=TypeMsg.INFO,
        )

        await self._deliver(
            (user_id,),
            PushEvent.CONVERSATION_CLEARED,
            {"userId": user_id, "targetId": target_id},
        )
        if target_id != user_id:
            await self._deliver(
                (target_id,),
                PushEvent.CONVERSATION_CLEARED,
                {"userId": target_id, "targetId": user_id},
            )
        return deleted

    async def _deliver(self, addresses: Iterable[int], event: PushEvent, payload: Any) -> None:
        try:
            await self._push.deliver_to_addresses(addresses, event, payload)
        except Exception as e:
            await log_error(f"Ошибка доставки {event.value}: {e}")
