# src/core/ambulance/service.py
"""
Сервис местоположения машины скорой помощи.
Запись координат через шлюз трекинга, смена статуса, рассылка обновлений.
"""

from __future__ import annotations

from typing import Any

from src.common.constants import ADDRESS_NOT_AVAILABLE, AMBULANCE_LOCATION_ID, PushEvent, TypeMsg
from src.common.exceptions import NotFoundError
from src.common.logger import log_error, log_info
from src.core.ambulance.models import AmbulanceLocation, LocationUpdateDTO
from src.core.ambulance.repository import AmbulanceRepository
from src.core.geo.service import GeoService
from src.core.push import PushGateway
from src.core.tracking.gate import LocationUpdateGate
from src.core.tracking.state import TrackingStateManager


class AmbulanceService:
    """
    Бизнес-логика местоположения машины.

    Порядок записи координат: шлюз -> upsert -> геокодирование (best-effort)
    -> перечитывание -> одна глобальная рассылка. Повторной рассылки
    после позднего геокодирования не бывает.
    """

    def __init__(
        self,
        repository: AmbulanceRepository,
        tracking: TrackingStateManager,
        gate: LocationUpdateGate,
        geo: GeoService,
        push: PushGateway,
    ) -> None:
        self._repo = repository
        self._tracking = tracking
        self._gate = gate
        self._geo = geo
        self._push = push

    async def get_location(self) -> AmbulanceLocation:
        """
        Текущее местоположение.

        Raises:
            NotFoundError: Записи ещё нет
        """
        location = await self._repo.get()
        if location is None:
            raise NotFoundError("Location not found")
        return location

    async def update_location(
        self,
        dto: LocationUpdateDTO,
        is_admin_override: bool = False,
    ) -> AmbulanceLocation:
        """
        Принимает новые координаты машины.

        Args:
            dto: Координаты и (опционально) статус занятости
            is_admin_override: Ручное обновление администратором

        Returns:
            Запись после обновления

        Raises:
            TrackingDisabledError: Трекинг выключен и нет admin-override
        """
        self._gate.ensure_allowed(is_admin_override)

        await self._repo.upsert_location(dto)

        address = await self._geo.reverse_geocode(dto.latitude, dto.longitude)
        if address:
            try:
                await self._repo.set_address(address)
            except Exception as e:
                await log_error(f"Не удалось сохранить адрес машины: {e}")
                address = None

        location = await self._repo.get()
        if location is None:
            raise NotFoundError("Location not found")

        await log_info(
            f"Координаты машины обновлены: {dto.latitude},{dto.longitude} "
            f"(admin={is_admin_override}, address={'yes' if address else 'no'})",
            type_msg=TypeMsg.DEBUG,
        )

        await self._broadcast_location(location)
        return location

    async def update_status(self, is_busy: bool) -> AmbulanceLocation:
        """
        Меняет статус занятости. Не зависит от состояния трекинга.

        Raises:
            NotFoundError: Записи о местоположении ещё нет
        """
        updated = await self._repo.update_status(is_busy)
        if not updated:
            raise NotFoundError("Location not found")

        location = await self._repo.get()
        if location is None:
            raise NotFoundError("Location not found")

        await log_info(
            f"Статус машины изменён на {'busy' if is_busy else 'available'}",
            type_msg=TypeMsg.INFO,
        )

        await self._broadcast_location(location)
        return location

    async def broadcast_current(self) -> dict[str, Any]:
        """
        Повторно рассылает сохранённое местоположение всем клиентам.

        Returns:
            Разосланный payload

        Raises:
            NotFoundError: Записи ещё нет
        """
        location = await self._repo.get()
        if location is None:
            raise NotFoundError("No ambulance location found")
        return await self._broadcast_location(location)

    async def location_detail(self, location_id: int = AMBULANCE_LOCATION_ID) -> AmbulanceLocation:
        """
        Запись с адресом. Если адрес не сохранён, геокодирует на лету
        (без записи в БД), при неудаче подставляет заглушку.
        """
        location = await self._repo.get(location_id)
        if location is None:
            raise NotFoundError("Location not found")

        if not location.address_text:
            address = await self._geo.reverse_geocode(location.latitude, location.longitude)
            location = location.model_copy(update={"address_text": address or ADDRESS_NOT_AVAILABLE})

        return location

    async def _broadcast_location(self, location: AmbulanceLocation) -> dict[str, Any]:
        """Глобальная рассылка ambulanceLocationUpdated. Ошибки только логируются."""
        payload = location.to_payload(self._tracking.is_enabled())
        try:
            await self._push.broadcast_global(PushEvent.LOCATION_UPDATED, payload)
        except Exception as e:
            await log_error(f"Ошибка рассылки местоположения: {e}")
        return payload
