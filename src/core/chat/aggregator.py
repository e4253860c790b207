# src/core/chat/aggregator.py
"""
Вычисление списка диалогов и истории пары из журнала сообщений.
Чистые функции, без обращений к БД.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from src.common.constants import MessageDirection
from src.core.chat.models import Conversation, HistoryMessage, LastMessage, Message


def _sort_key(message: Message) -> tuple:
    # При равном created_at побеждает больший id
    return (message.created_at, message.id)


def aggregate_conversations(
    user_id: int,
    messages: Iterable[Message],
    partner_names: Mapping[int, Optional[str]],
) -> list[Conversation]:
    """
    Последнее сообщение с каждым собеседником.

    Сообщения, где user_id не участвует, игнорируются. Сообщения самому
    себе образуют диалог с partner_id == user_id.

    Args:
        user_id: Пользователь, для которого строится список
        messages: Сообщения пользователя в любом порядке
        partner_names: ID собеседника -> полное имя (отсутствует -> None)

    Returns:
        Диалоги от самого свежего к самому старому
    """
    latest: dict[int, Message] = {}

    for message in messages:
        if user_id not in (message.sender_id, message.receiver_id):
            continue
        partner_id = message.partner_of(user_id)
        current = latest.get(partner_id)
        if current is None or _sort_key(message) > _sort_key(current):
            latest[partner_id] = message

    ordered = sorted(latest.items(), key=lambda item: _sort_key(item[1]), reverse=True)

    return [
        Conversation(
            partner_id=partner_id,
            partner_name=partner_names.get(partner_id),
            last_message=LastMessage(
                content=message.content,
                image_url=message.image_url,
                latitude=message.latitude,
                longitude=message.longitude,
                emoticon_code=message.emoticon_code,
            ),
            last_timestamp=message.created_at,
        )
        for partner_id, message in ordered
    ]


def build_history(user_id: int, messages: Iterable[Message]) -> list[HistoryMessage]:
    """
    История пары по возрастанию времени с флагом направления.

    Args:
        user_id: Запрашивающий пользователь
        messages: Сообщения пары в любом порядке
    """
    result = []
    for message in sorted(messages, key=_sort_key):
        direction = (
            MessageDirection.OUTGOING if message.sender_id == user_id else MessageDirection.INCOMING
        )
        result.append(HistoryMessage(**message.model_dump(), direction=direction))
    return result
