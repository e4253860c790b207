# src/infra/__init__.py
"""
Инфраструктурный слой.
Работа с внешними сервисами: PostgreSQL.
"""

from src.infra.database import DatabaseManager, get_db, init_db, close_db, affected_rows

__all__ = [
    "DatabaseManager",
    "get_db",
    "init_db",
    "close_db",
    "affected_rows",
]
