from typing import Any, Optional

from fastapi import APIRouter, Depends, Header
from pydantic import BaseModel, Field

from src.common.constants import ADMIN_UPDATE_HEADER
from src.core.ambulance.models import LocationUpdateDTO
from src.core.ambulance.service import AmbulanceService
from src.core.tracking.service import TrackingService
from src.core.tracking.state import TrackingStateManager
from src.services.dispatch_api.dependencies import (
    get_ambulance_service,
    get_tracking_service,
    get_tracking_state,
)

router = APIRouter(prefix="/ambulance", tags=["Ambulance"])


class StatusUpdateRequest(BaseModel):
    is_busy: bool = Field(..., alias="isBusy")

    class Config:
        populate_by_name = True


class ToggleTrackingRequest(BaseModel):
    # Без строгой типизации: активным считается только true
    enabled: Any = None


def is_admin_update(value: Optional[str]) -> bool:
    return value is not None and value.lower() == "true"


@router.get("")
async def get_location(
    service: AmbulanceService = Depends(get_ambulance_service),
    tracking: TrackingStateManager = Depends(get_tracking_state),
):
    location = await service.get_location()
    return location.to_payload(tracking.is_enabled())


@router.put("")
async def update_location(
    request: LocationUpdateDTO,
    x_admin_update: Optional[str] = Header(default=None, alias=ADMIN_UPDATE_HEADER),
    service: AmbulanceService = Depends(get_ambulance_service),
    tracking: TrackingStateManager = Depends(get_tracking_state),
):
    location = await service.update_location(request, is_admin_override=is_admin_update(x_admin_update))
    return {
        "success": True,
        "trackingActive": tracking.is_enabled(),
        "location": location.model_dump(by_alias=True, mode="json"),
    }


@router.put("/status")
async def update_status(
    request: StatusUpdateRequest,
    service: AmbulanceService = Depends(get_ambulance_service),
    tracking: TrackingStateManager = Depends(get_tracking_state),
):
    location = await service.update_status(request.is_busy)
    return {
        "success": True,
        "isBusy": location.is_busy,
        "trackingActive": tracking.is_enabled(),
        "message": f"Status changed to {'busy' if location.is_busy else 'available'}",
    }


@router.post("/tracking/toggle")
async def toggle_tracking(
    request: Optional[ToggleTrackingRequest] = None,
    service: TrackingService = Depends(get_tracking_service),
):
    status = await service.toggle(request.enabled if request else None)
    active = status["trackingActive"]
    return {
        "success": True,
        "ambulanceTrackingActive": active,
        "message": f"Tracking {'enabled' if active else 'disabled'}",
        **status,
    }


@router.get("/tracking/status")
async def get_tracking_status(service: TrackingService = Depends(get_tracking_service)):
    status = service.get_status()
    return {"ambulanceTrackingActive": status["trackingActive"], **status}


@router.post("/broadcast-location")
async def broadcast_location(
    service: AmbulanceService = Depends(get_ambulance_service),
    tracking: TrackingStateManager = Depends(get_tracking_state),
):
    payload = await service.broadcast_current()
    return {
        "success": True,
        "message": "Location broadcasted",
        "data": payload,
        "trackingActive": tracking.is_enabled(),
    }


@router.get("/{location_id}/location-detail")
async def get_location_detail(
    location_id: int,
    service: AmbulanceService = Depends(get_ambulance_service),
    tracking: TrackingStateManager = Depends(get_tracking_state),
):
    location = await service.location_detail(location_id)
    return location.to_payload(tracking.is_enabled())
