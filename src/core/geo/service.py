# src/core/geo/service.py
"""
Geo-сервис для обратного геокодирования через OpenStreetMap Nominatim.
Координаты -> человекочитаемый адрес. Работает по принципу best-effort:
любая ошибка или таймаут превращаются в None.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from src.common.constants import TypeMsg
from src.common.logger import log_info, log_error


class GeoService:
    """
    Сервис обратного геокодирования.

    Один httpx.AsyncClient на весь процесс, закрывается при остановке приложения.
    Каждый запрос ограничен жёстким таймаутом: по его истечении адрес
    считается неизвестным, запрос клиента не блокируется.
    """

    DEFAULT_URL = "https://nominatim.openstreetmap.org/reverse"

    def __init__(
        self,
        url: str | None = None,
        user_agent: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Инициализация сервиса.

        Args:
            url: Адрес reverse-эндпоинта Nominatim (берётся из конфига если None)
            user_agent: User-Agent, обязателен по правилам Nominatim
            language: Предпочтительный язык адреса
            timeout: Жёсткий таймаут запроса в секундах
            client: Готовый HTTP клиент (для тестов)
        """
        if url is None:
            from src.config import settings
            geo = settings.geocoding
            url = geo.GEOCODING_URL
            user_agent = user_agent or geo.GEOCODING_USER_AGENT
            language = language or geo.GEOCODING_LANGUAGE
            timeout = timeout or geo.GEOCODE_TIMEOUT

        self._url = url
        self._user_agent = user_agent or "AmbulanceTracker/1.0"
        self._language = language or "id"
        self._timeout = timeout or 5.0
        self._client = client or httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": self._user_agent},
        )

    @property
    def timeout(self) -> float:
        return self._timeout

    async def close(self) -> None:
        """Закрывает HTTP клиент."""
        await self._client.aclose()

    async def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
    ) -> Optional[str]:
        """
        Обратное геокодирование: координаты -> адрес.

        Args:
            latitude: Широта
            longitude: Долгота

        Returns:
            Адрес (display_name) или None при ошибке, таймауте или пустом ответе
        """
        try:
            response = await asyncio.wait_for(
                self._client.get(
                    self._url,
                    params={
                        "format": "json",
                        "lat": latitude,
                        "lon": longitude,
                        "accept-language": self._language,
                    },
                    headers={"User-Agent": self._user_agent},
                ),
                timeout=self._timeout,
            )
            response.raise_for_status()

            data = response.json()
            address = data.get("display_name") if isinstance(data, dict) else None

            if not address:
                await log_info(
                    f"Геокодирование не дало результатов для: {latitude},{longitude}",
                    type_msg=TypeMsg.WARNING,
                )
                return None

            return address
        except asyncio.TimeoutError:
            await log_info(
                f"Таймаут обратного геокодирования ({self._timeout}s) для {latitude},{longitude}",
                type_msg=TypeMsg.WARNING,
            )
            return None
        except Exception as e:
            await log_error(f"Ошибка обратного геокодирования: {e}")
            return None
