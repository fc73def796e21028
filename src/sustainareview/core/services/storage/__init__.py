from .photo_storage import PhotoStorageService, UploadedPhoto

__all__ = ["PhotoStorageService", "UploadedPhoto"]
