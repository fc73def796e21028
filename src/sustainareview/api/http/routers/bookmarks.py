from fastapi import APIRouter, Depends, Response

from src.sustainareview.api.http.deps import get_bookmark_service, get_current_user
from src.sustainareview.api.http.routers.auth import MessageResponse
from src.sustainareview.core.services import BookmarkService
from src.sustainareview.entities.core.user import User

router = APIRouter(prefix="/products/{product_id}/bookmark", tags=["bookmarks"])


@router.post("", response_model=MessageResponse, status_code=201)
def bookmark_product(
    product_id: str,
    user: User = Depends(get_current_user),
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
) -> MessageResponse:
    bookmark_service.add(user, product_id)
    return MessageResponse(message="Product bookmarked successfully")


@router.delete("", status_code=204)
def unbookmark_product(
    product_id: str,
    user: User = Depends(get_current_user),
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
) -> Response:
    bookmark_service.remove(user, product_id)
    return Response(status_code=204)
