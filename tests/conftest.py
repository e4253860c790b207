# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")

from src.core.geo.service import GeoService
from src.core.tracking.state import TrackingStateManager


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "PROJECT_NAME": "ambulance_dispatch_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "HOST": "127.0.0.1",
        "PORT": 3001,
        "API_PREFIX": "/api",
        "ALLOWED_ORIGINS": ["http://localhost:5173", "*"],
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "colored",
        "LOG_TO_FILE": False,
        "LOG_FILE_PATH": "logs/test.log",
        "DB_HOST": "localhost",
        "DB_PORT": 5432,
        "DB_NAME": "ambulance_test",
        "DB_USER": "postgres",
        "DB_PASSWORD": "test_password",
        "DB_MIN_POOL_SIZE": 1,
        "DB_MAX_POOL_SIZE": 5,
        "DB_COMMAND_TIMEOUT": 30,
        "GEOCODING_URL": "https://geo.test/reverse",
        "GEOCODING_USER_AGENT": "AmbulanceTrackerTest/1.0",
        "GEOCODING_LANGUAGE": "en",
        "GEOCODE_TIMEOUT": 2.5,
        "TRACKING_ACTIVE_ON_START": False,
        "COMMENTS_PURGE_ENABLED": True,
        "COMMENTS_PURGE_HOUR": 3,
        "COMMENTS_PURGE_MINUTE": 30,
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Создаёт временный файл конфигурации."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(mock_config, ensure_ascii=False, indent=2))
    return config_file


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_db() -> AsyncMock:
    """Мок менеджера базы данных."""
    db = AsyncMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.execute = AsyncMock(return_value="UPDATE 1")
    db.fetchval = AsyncMock(return_value=None)
    db.health_check = AsyncMock(return_value=True)
    return db


@pytest.fixture
def mock_push() -> MagicMock:
    """Мок доставки push-событий."""
    push = MagicMock()
    push.broadcast_global = AsyncMock(return_value=1)
    push.deliver_to_addresses = AsyncMock(return_value=1)
    return push


@pytest.fixture
def mock_geo() -> AsyncMock:
    """Мок geo-сервиса, по умолчанию геокодирование ничего не находит."""
    geo = AsyncMock(spec=GeoService)
    geo.reverse_geocode = AsyncMock(return_value=None)
    return geo


class FakeClock:
    """Управляемые часы в миллисекундах."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracking(clock: FakeClock) -> TrackingStateManager:
    """Состояние трекинга, включённое при старте."""
    return TrackingStateManager(active=True, clock=clock)


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def location_row() -> dict[str, Any]:
    """Строка ambulance_location в виде, в котором её возвращает asyncpg."""
    return {
        "latitude": -6.2088,
        "longitude": 106.8456,
        "is_busy": False,
        "address_text": None,
        "updated_at": BASE_TIME,
    }


@pytest.fixture
def message_row() -> Callable[..., dict[str, Any]]:
    """Фабрика строк таблицы messages."""

    def _make(
        id: int,
        sender_id: int,
        receiver_id: int,
        minutes: int = 0,
        content: str | None = "hello",
        **overrides: Any,
    ) -> dict[str, Any]:
        row = {
            "id": id,
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "content": content,
            "image_url": None,
            "latitude": None,
            "longitude": None,
            "emoticon_code": None,
            "created_at": BASE_TIME + timedelta(minutes=minutes),
        }
        row.update(overrides)
        return row

    return _make


# =============================================================================
# ФИКСТУРЫ API
# =============================================================================

@pytest.fixture
def api_app(tracking: TrackingStateManager, mock_geo: AsyncMock, mock_db: AsyncMock):
    """Приложение с подменённой БД. Lifespan не запускается."""
    from src.services.dispatch_api.app import create_app
    from src.services.dispatch_api.dependencies import get_database

    app = create_app(tracking=tracking, geo=mock_geo)
    app.dependency_overrides[get_database] = lambda: mock_db
    return app


@pytest.fixture
def client(api_app):
    from fastapi.testclient import TestClient

    return TestClient(api_app)


@pytest.fixture
def live_client(api_app):
    """
    Клиент с запущенным lifespan: все запросы и WebSocket сессии
    работают в одном event loop.
    """
    from fastapi.testclient import TestClient

    worker = MagicMock()
    worker.start = AsyncMock()
    worker.stop = AsyncMock()

    with patch("src.services.dispatch_api.app.init_db", new=AsyncMock()), \
            patch("src.services.dispatch_api.app.close_db", new=AsyncMock()), \
            patch("src.services.dispatch_api.app.CommentsCleanupWorker", return_value=worker):
        with TestClient(api_app) as test_client:
            yield test_client
