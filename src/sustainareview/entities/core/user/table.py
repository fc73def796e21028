"""User database table model."""

from sqlmodel import Field

from src.sustainareview.entities._base import TimestampedEntityTable


class UserTable(TimestampedEntityTable, table=True):
    """Database persistence model for users."""

    __tablename__ = "users"

    username: str = Field(max_length=100, unique=True, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
