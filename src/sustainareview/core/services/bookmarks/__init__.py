from .bookmark_service import BookmarkService

__all__ = ["BookmarkService"]
