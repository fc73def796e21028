"""Local-disk storage for review photos."""

from dataclasses import dataclass
from pathlib import Path

from fastapi import HTTPException
from loguru import logger

from src.sustainareview.entities._base import new_id
from src.sustainareview.runtime.context import get_config

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
}


@dataclass
class UploadedPhoto:
    """An uploaded file, already read into memory."""

    filename: str
    content_type: str
    data: bytes


class PhotoStorageService:
    def __init__(self, directory: Path | None = None):
        cfg = get_config().uploads
        self._directory = Path(directory or cfg.directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def validate(self, photo: UploadedPhoto) -> None:
        """Reject files of the wrong type or size with a 400."""
        cfg = get_config().uploads
        if photo.content_type not in cfg.allowed_content_types:
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported photo type {photo.content_type!r}; use JPEG, PNG or GIF",
            )
        if len(photo.data) == 0:
            raise HTTPException(status_code=400, detail=f"Photo {photo.filename!r} is empty")
        if len(photo.data) > cfg.max_bytes:
            max_mb = cfg.max_bytes / (1024 * 1024)
            raise HTTPException(
                status_code=400,
                detail=f"Photo {photo.filename!r} exceeds the {max_mb:g} MB limit",
            )

    def validate_batch(self, photos: list[UploadedPhoto]) -> None:
        limit = get_config().uploads.max_files_per_review
        if len(photos) > limit:
            raise HTTPException(
                status_code=400, detail=f"At most {limit} photos can be attached"
            )
        for photo in photos:
            self.validate(photo)

    def save(self, photo: UploadedPhoto) -> str:
        """Write a validated photo to disk and return its public URL."""
        self.validate(photo)
        public_path = get_config().uploads.public_path.rstrip("/")
        name = f"{new_id()}{_EXTENSIONS.get(photo.content_type, '')}"

        self._directory.mkdir(parents=True, exist_ok=True)
        (self._directory / name).write_bytes(photo.data)
        logger.info("Stored photo {} ({} bytes)", name, len(photo.data))
        return f"{public_path}/{name}"

    def delete(self, photo_url: str) -> None:
        """Remove a stored photo; URLs outside the upload path are ignored."""
        public_path = get_config().uploads.public_path.rstrip("/") + "/"
        if not photo_url.startswith(public_path):
            return
        path = self._directory / Path(photo_url[len(public_path):]).name
        path.unlink(missing_ok=True)
