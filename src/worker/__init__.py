# src/worker/__init__.py
"""
Фоновые воркеры, работающие внутри процесса API.
"""

from src.worker.base import BaseWorker
from src.worker.comments_cleanup import CommentsCleanupWorker

__all__ = ["BaseWorker", "CommentsCleanupWorker"]
