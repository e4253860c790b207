# src/services/dispatch_api/app.py
"""
FastAPI приложение диспетчерской.

REST endpoints под /api, push-канал на /ws.
Процессные синглтоны создаются в create_app() и кладутся в app.state.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.common.constants import TypeMsg
from src.common.exceptions import DispatchError
from src.common.logger import log_error, log_info, setup_logging
from src.config import Settings, settings as default_settings
from src.core.comments.repository import CommentRepository
from src.core.comments.service import CommentService
from src.core.geo.service import GeoService
from src.core.tracking.gate import LocationUpdateGate
from src.core.tracking.service import TrackingService
from src.core.tracking.state import TrackingStateManager
from src.infra.database import DatabaseManager, close_db, get_db, init_db
from src.services.dispatch_api.dependencies import get_database
from src.services.dispatch_api.routes import api_router
from src.services.realtime_ws.connection_manager import ConnectionManager
from src.services.realtime_ws.routes import router as ws_router
from src.shared.models.common import HealthStatus
from src.worker.comments_cleanup import CommentsCleanupWorker

SERVICE_NAME = "ambulance_dispatch"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Жизненный цикл приложения."""
    conf: Settings = app.state.settings
    worker: CommentsCleanupWorker | None = None

    # Startup
    await init_db()

    if conf.cleanup.COMMENTS_PURGE_ENABLED:
        worker = CommentsCleanupWorker(
            CommentService(CommentRepository(get_db()), app.state.connections),
            hour=conf.cleanup.COMMENTS_PURGE_HOUR,
            minute=conf.cleanup.COMMENTS_PURGE_MINUTE,
        )
        await worker.start()

    await log_info(
        f"Ambulance tracking is {'ENABLED' if app.state.tracking.is_enabled() else 'DISABLED'}",
        type_msg=TypeMsg.INFO,
    )

    yield

    # Shutdown
    if worker:
        await worker.stop()
    await app.state.geo.close()
    await close_db()


def _error_body(error: str, error_code: str, **extra) -> dict:
    return {"error": error, "error_code": error_code, **extra}


def register_exception_handlers(app: FastAPI) -> None:
    """Единый формат ошибок: {"error", "error_code", ...}."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "Invalid request",
                "validation_error",
                details=jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(DispatchError)
    async def dispatch_exception_handler(request: Request, exc: DispatchError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.error_code, **exc.details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(message, "http_error"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        await log_error(
            f"Необработанная ошибка {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("Something went wrong!", "internal_error"),
        )


def create_app(
    settings: Settings | None = None,
    tracking: TrackingStateManager | None = None,
    geo: GeoService | None = None,
) -> FastAPI:
    """
    Собирает приложение.

    Args:
        settings: Настройки (по умолчанию из config.json)
        tracking: Состояние трекинга (для тестов)
        geo: Geo-сервис (для тестов)
    """
    conf = settings or default_settings
    setup_logging()

    app = FastAPI(
        title="Ambulance Dispatch API",
        description="Местоположение машины скорой помощи, чат и push-уведомления.",
        version=conf.system.VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    tracking = tracking or TrackingStateManager(active=conf.tracking.TRACKING_ACTIVE_ON_START)
    connections = ConnectionManager(tracking)

    app.state.settings = conf
    app.state.tracking = tracking
    app.state.gate = LocationUpdateGate(tracking)
    app.state.connections = connections
    app.state.tracking_service = TrackingService(tracking, connections)
    app.state.geo = geo or GeoService()

    origins = conf.server.ALLOWED_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=bool(origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix=conf.server.API_PREFIX)
    app.include_router(ws_router)

    @app.get("/", tags=["Health"])
    async def root() -> dict:
        prefix = conf.server.API_PREFIX
        return {
            "message": "Ambulance Tracker API is running",
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "ambulanceTrackingActive": app.state.tracking.is_enabled(),
            "endpoints": {
                "comments": f"{prefix}/comments",
                "ambulance": f"{prefix}/ambulance",
                "chat": f"{prefix}/chat",
                "websocket": "/ws",
            },
        }

    @app.get("/health", response_model=HealthStatus, tags=["Health"])
    async def health_check(db: DatabaseManager = Depends(get_database)) -> HealthStatus:
        """Проверка здоровья сервиса."""
        db_ok = await db.health_check()
        return HealthStatus(
            service=SERVICE_NAME,
            status="healthy" if db_ok else "degraded",
            version=conf.system.VERSION,
            tracking_active=app.state.tracking.is_enabled(),
            dependencies={"postgres": "healthy" if db_ok else "unhealthy"},
        )

    return app


app = create_app()
