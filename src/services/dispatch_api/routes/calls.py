from fastapi import APIRouter, Depends

from src.core.calls.models import CallCreateDTO
from src.core.calls.service import CallService
from src.services.dispatch_api.dependencies import get_call_service
from src.shared.models.common import SuccessResponse

router = APIRouter(prefix="/ambulance", tags=["Calls"])


@router.post("/call")
async def record_call(
    request: CallCreateDTO,
    service: CallService = Depends(get_call_service),
):
    call = await service.record_call(request.user_id)
    return {
        "success": True,
        "call": call.model_dump(by_alias=True, mode="json") if call else None,
    }


@router.get("/history")
async def get_history(service: CallService = Depends(get_call_service)):
    calls = await service.history()
    return [call.model_dump(by_alias=True, mode="json") for call in calls]


# Должен быть объявлен до /history/{call_id}
@router.delete("/history/clear")
async def clear_history(service: CallService = Depends(get_call_service)):
    cleared = await service.clear()
    return {
        "success": True,
        "message": "All call history cleared successfully",
        "clearedCount": cleared,
    }


@router.delete("/history/{call_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_call(
    call_id: int,
    service: CallService = Depends(get_call_service),
):
    await service.delete(call_id)
    return SuccessResponse()
