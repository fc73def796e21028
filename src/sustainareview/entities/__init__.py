"""Entities organized by business concept rather than technical layer.

Each entity has its own package containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.password_reset import (
    PasswordResetToken,
    PasswordResetTokenRepository,
    PasswordResetTokenTable,
)
from .core.user import User, UserRepository, UserTable
from .service.attribute import AttributeType, ProductAttribute, ProductAttributeRepository, ProductAttributeTable
from .service.bookmark import Bookmark, BookmarkRepository, BookmarkTable
from .service.category import Category, CategoryRepository, CategoryTable
from .service.product import Product, ProductAttributeLinkTable, ProductRepository, ProductTable
from .service.review import (
    ModerationStatus,
    Review,
    ReviewPhoto,
    ReviewPhotoTable,
    ReviewRepository,
    ReviewTable,
    ReviewVoteTable,
)

__all__ = [
    "User",
    "UserTable",
    "UserRepository",
    "PasswordResetToken",
    "PasswordResetTokenTable",
    "PasswordResetTokenRepository",
    "Category",
    "CategoryTable",
    "CategoryRepository",
    "AttributeType",
    "ProductAttribute",
    "ProductAttributeTable",
    "ProductAttributeRepository",
    "Product",
    "ProductTable",
    "ProductAttributeLinkTable",
    "ProductRepository",
    "ModerationStatus",
    "Review",
    "ReviewTable",
    "ReviewPhoto",
    "ReviewPhotoTable",
    "ReviewVoteTable",
    "ReviewRepository",
    "Bookmark",
    "BookmarkTable",
    "BookmarkRepository",
]
