"""Entity package: Review, with its photos and helpful votes."""

from .entity import ModerationStatus, Review, ReviewPhoto
from .repository import ReviewRepository
from .table import ReviewPhotoTable, ReviewTable, ReviewVoteTable

__all__ = [
    "ModerationStatus",
    "Review",
    "ReviewPhoto",
    "ReviewRepository",
    "ReviewTable",
    "ReviewPhotoTable",
    "ReviewVoteTable",
]
