from fastapi import APIRouter, Depends

from src.core.chat.models import MessageCreateDTO
from src.core.chat.service import ChatService
from src.services.dispatch_api.dependencies import get_chat_service
from src.shared.models.common import SuccessResponse

router = APIRouter(prefix="/chat", tags=["Chat"])


# Должен быть объявлен до /{user_id}/{target_id}
@router.get("/conversation/{user_id}")
async def get_conversations(
    user_id: int,
    service: ChatService = Depends(get_chat_service),
):
    conversations = await service.list_conversations(user_id)
    return [c.model_dump(by_alias=True, mode="json") for c in conversations]


@router.get("/{user_id}/{target_id}")
async def get_history(
    user_id: int,
    target_id: int,
    service: ChatService = Depends(get_chat_service),
):
    messages = await service.history(user_id, target_id)
    return [m.model_dump(by_alias=True, mode="json") for m in messages]


@router.post("")
async def send_message(
    request: MessageCreateDTO,
    service: ChatService = Depends(get_chat_service),
):
    message = await service.send(request)
    return {"success": True, "message": message.model_dump(by_alias=True, mode="json")}


@router.delete("/clear/{user_id}/{target_id}")
async def clear_conversation(
    user_id: int,
    target_id: int,
    service: ChatService = Depends(get_chat_service),
):
    deleted = await service.clear_conversation(user_id, target_id)
    return {
        "success": True,
        "message": "All messages cleared successfully",
        "deletedCount": deleted,
    }


@router.delete("/{message_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_message(
    message_id: int,
    service: ChatService = Depends(get_chat_service),
):
    await service.delete_message(message_id)
    return SuccessResponse()
