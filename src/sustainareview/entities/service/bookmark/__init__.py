"""Entity package: Bookmark."""

from .entity import Bookmark
from .repository import BookmarkRepository
from .table import BookmarkTable

__all__ = ["Bookmark", "BookmarkRepository", "BookmarkTable"]
