# src/core/ambulance/repository.py
"""
Репозиторий записи о местоположении машины.
Таблица ambulance_location всегда содержит не более одной строки с id = 1.
"""

from __future__ import annotations

from typing import Optional

from src.common.constants import AMBULANCE_LOCATION_ID
from src.core.ambulance.models import AmbulanceLocation, LocationUpdateDTO
from src.infra.database import DatabaseManager, affected_rows

_SELECT_LOCATION = """
    SELECT latitude, longitude, is_busy, address_text, updated_at
    FROM ambulance_location
    WHERE id = $1
"""


class AmbulanceRepository:
    """
    Репозиторий местоположения машины.

    Ошибки БД не перехватываются: без записи в БД нечего рассылать,
    поэтому они поднимаются до HTTP-слоя и превращаются в 500.
    """

    def __init__(self, db: DatabaseManager) -> None:
        """
        Args:
            db: Менеджер базы данных (Dependency Injection)
        """
        self._db = db

    @staticmethod
    def _row_to_location(row) -> AmbulanceLocation:
        return AmbulanceLocation(
            latitude=row["latitude"],
            longitude=row["longitude"],
            is_busy=row["is_busy"],
            address_text=row["address_text"],
            updated_at=row["updated_at"],
        )

    async def get(self, location_id: int = AMBULANCE_LOCATION_ID) -> Optional[AmbulanceLocation]:
        """
        Возвращает запись о местоположении или None.

        Args:
            location_id: ID записи (для location-detail, по умолчанию 1)
        """
        row = await self._db.fetchrow(_SELECT_LOCATION, location_id)
        if row is None:
            return None
        return self._row_to_location(row)

    async def upsert_location(self, dto: LocationUpdateDTO) -> None:
        """
        Вставляет запись или обновляет координаты существующей.
        Если is_busy не передан, при вставке он False, при обновлении не меняется.
        """
        await self._db.execute(
            """
            INSERT INTO ambulance_location (id, latitude, longitude, is_busy, updated_at)
            VALUES ($1, $2, $3, COALESCE($4, FALSE), NOW())
            ON CONFLICT (id) DO UPDATE SET
                latitude = EXCLUDED.latitude,
                longitude = EXCLUDED.longitude,
                is_busy = COALESCE($4, ambulance_location.is_busy),
                updated_at = EXCLUDED.updated_at
            """,
            AMBULANCE_LOCATION_ID,
            dto.latitude,
            dto.longitude,
            dto.is_busy,
        )

    async def set_address(self, address_text: str) -> None:
        """Сохраняет адрес отдельной записью, координаты не трогает."""
        await self._db.execute(
            "UPDATE ambulance_location SET address_text = $2 WHERE id = $1",
            AMBULANCE_LOCATION_ID,
            address_text,
        )

    async def update_status(self, is_busy: bool) -> bool:
        """
        Меняет только статус занятости.

        Returns:
            False если записи о местоположении ещё нет
        """
        status = await self._db.execute(
            "UPDATE ambulance_location SET is_busy = $2, updated_at = NOW() WHERE id = $1",
            AMBULANCE_LOCATION_ID,
            is_busy,
        )
        return affected_rows(status) > 0
