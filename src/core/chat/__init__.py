# src/core/chat/__init__.py
"""
Чат между гражданами и диспетчерами.
"""

from src.core.chat.models import Conversation, HistoryMessage, Message, MessageCreateDTO
from src.core.chat.repository import MessageRepository
from src.core.chat.service import ChatService

__all__ = [
    "Conversation",
    "HistoryMessage",
    "Message",
    "MessageCreateDTO",
    "MessageRepository",
    "ChatService",
]
