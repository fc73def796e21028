"""Core services exports."""

from .auth.auth_service import AuthService
from .bookmarks.bookmark_service import BookmarkService
from .catalog.catalog_service import CatalogService
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .email.email_service import EmailService
from .jwt.jwt_gen import JwtGeneratorService
from .jwt.jwt_verify import JwtVerificationService
from .reviews.review_service import ReviewService
from .storage.photo_storage import PhotoStorageService, UploadedPhoto

__all__ = [
    "AuthService",
    "BookmarkService",
    "CatalogService",
    "DbManageService",
    "DbSessionService",
    "EmailService",
    "JwtGeneratorService",
    "JwtVerificationService",
    "PhotoStorageService",
    "ReviewService",
    "UploadedPhoto",
]
