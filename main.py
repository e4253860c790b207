#!/usr/bin/env python3
# main.py
"""
Главная точка входа диспетчерского сервиса скорой помощи.
Запускает HTTP/WebSocket API или применяет схему БД в зависимости от аргументов.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

from src.config import settings
from src.common.logger import setup_logging, log_info, log_error
from src.common.constants import TypeMsg
from src.infra.database import init_db, close_db


VALID_MODES = ("api", "migrate")


async def run_api() -> None:
    """Запускает Dispatch API (REST + WebSocket)."""
    import uvicorn

    host = settings.server.HOST
    port = settings.server.PORT
    base_url = settings.server.SERVER_BASE_URL or f"http://{host}:{port}"

    await log_info(f"Запуск Dispatch API на http://{host}:{port}", type_msg=TypeMsg.INFO)
    await log_info(f"SERVER_BASE_URL: {base_url}", type_msg=TypeMsg.INFO)

    config = uvicorn.Config(
        "src.services.dispatch_api.app:app",
        host=host,
        port=port,
        reload=False,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    try:
        await server.serve()
    except asyncio.CancelledError:
        await log_info("Dispatch API: graceful shutdown", type_msg=TypeMsg.DEBUG)
        await server.shutdown()


async def run_migrations() -> None:
    """Применяет migrations/init.sql и завершает работу."""
    try:
        await init_db()
    finally:
        await close_db()
    await log_info("Миграции применены", type_msg=TypeMsg.INFO)


async def main(mode: Optional[str] = None) -> None:
    """
    Главная асинхронная функция.

    Args:
        mode: Режим запуска (api, migrate); по умолчанию api
    """
    setup_logging()
    mode = mode or "api"

    await log_info(
        f"{settings.system.PROJECT_NAME} v{settings.system.VERSION}: запуск в режиме '{mode}'",
        type_msg=TypeMsg.INFO,
    )

    try:
        if mode == "api":
            await run_api()
        elif mode == "migrate":
            await run_migrations()
    except Exception as e:
        await log_error(f"Критическая ошибка: {e}", exc_info=True)
        raise


def print_usage() -> None:
    """Выводит справку по использованию."""
    print(f"""
{settings.system.PROJECT_NAME} v{settings.system.VERSION}

Использование:
    python main.py [mode]

Режимы:
    api        : HTTP API + WebSocket push-канал (по умолчанию, порт {settings.server.PORT})
    migrate    : применить migrations/init.sql и выйти

Опции:
    -h, --help : эта справка
""")


if __name__ == "__main__":
    mode = None

    if len(sys.argv) > 1:
        arg = sys.argv[1].lower()
        if arg in ("--help", "-h"):
            print_usage()
            sys.exit(0)
        elif arg in VALID_MODES:
            mode = arg
        else:
            print(f"Ошибка: неизвестный режим '{arg}'")
            print_usage()
            sys.exit(1)

    try:
        asyncio.run(main(mode))
    except KeyboardInterrupt:
        print("\nОстановлено пользователем")
