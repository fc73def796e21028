from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel

from src.sustainareview.api.http.deps import get_current_user, get_photo_storage
from src.sustainareview.api.http.routers.reviews import read_upload
from src.sustainareview.core.services import PhotoStorageService
from src.sustainareview.entities.core.user import User

router = APIRouter(prefix="/upload", tags=["uploads"])


class PhotoUploadResponse(BaseModel):
    photo_url: str


@router.post("/photo", response_model=PhotoUploadResponse, status_code=201)
def upload_photo(
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
    storage: PhotoStorageService = Depends(get_photo_storage),
) -> PhotoUploadResponse:
    """Store a single photo and return the URL it is served from."""
    return PhotoUploadResponse(photo_url=storage.save(read_upload(file)))
