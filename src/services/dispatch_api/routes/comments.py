from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.core.comments.models import CommentCreateDTO
from src.core.comments.service import DEFAULT_PAGE_SIZE, CommentService
from src.services.dispatch_api.dependencies import get_comment_service
from src.shared.models.common import SuccessResponse

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get("")
async def list_comments(
    ambulance_id: Optional[int] = Query(default=None, alias="ambulanceId"),
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    service: CommentService = Depends(get_comment_service),
):
    result = await service.list_comments(ambulance_id, page, limit)
    return result.model_dump(by_alias=True, mode="json")


@router.post("")
async def create_comment(
    request: CommentCreateDTO,
    service: CommentService = Depends(get_comment_service),
):
    comment = await service.create(request)
    if comment is None:
        return {"success": True}
    return {"success": True, "comment": comment.model_dump(by_alias=True, mode="json")}


@router.delete("/{comment_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_comment(
    comment_id: int,
    service: CommentService = Depends(get_comment_service),
):
    await service.delete(comment_id)
    return SuccessResponse()
