# src/services/dispatch_api/dependencies.py
"""
Фабрики зависимостей для роутов.
Процессные синглтоны (трекинг, соединения, geo) лежат в app.state,
репозитории создаются на каждый запрос поверх общего пула.
"""

from __future__ import annotations

from fastapi import Depends, Request

from src.core.ambulance.repository import AmbulanceRepository
from src.core.ambulance.service import AmbulanceService
from src.core.calls.repository import CallRepository
from src.core.calls.service import CallService
from src.core.chat.repository import MessageRepository
from src.core.chat.service import ChatService
from src.core.comments.repository import CommentRepository
from src.core.comments.service import CommentService
from src.core.tracking.service import TrackingService
from src.core.tracking.state import TrackingStateManager
from src.infra.database import DatabaseManager, get_db


def get_database() -> DatabaseManager:
    return get_db()


def get_tracking_state(request: Request) -> TrackingStateManager:
    return request.app.state.tracking


def get_tracking_service(request: Request) -> TrackingService:
    return request.app.state.tracking_service


def get_ambulance_service(
    request: Request,
    db: DatabaseManager = Depends(get_database),
) -> AmbulanceService:
    state = request.app.state
    return AmbulanceService(
        repository=AmbulanceRepository(db),
        tracking=state.tracking,
        gate=state.gate,
        geo=state.geo,
        push=state.connections,
    )


def get_chat_service(
    request: Request,
    db: DatabaseManager = Depends(get_database),
) -> ChatService:
    return ChatService(MessageRepository(db), request.app.state.connections)


def get_comment_service(
    request: Request,
    db: DatabaseManager = Depends(get_database),
) -> CommentService:
    return CommentService(CommentRepository(db), request.app.state.connections)


def get_call_service(
    request: Request,
    db: DatabaseManager = Depends(get_database),
) -> CallService:
    return CallService(CallRepository(db), request.app.state.connections)
