"""Entity: Category."""

from pydantic import Field

from src.sustainareview.entities._base import Entity


class Category(Entity):
    """Product category used for browsing and filtering."""

    name: str = Field(description="Unique category name")
    description: str | None = None
