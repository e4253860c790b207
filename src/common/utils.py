# src/common/utils.py
"""
Мелкие вспомогательные функции.
"""

from __future__ import annotations

from typing import Any, Optional


def clean_text(value: Any) -> Optional[str]:
    """Обрезает пробелы, пустые и нестроковые значения превращает в None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None
