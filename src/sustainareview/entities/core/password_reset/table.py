"""PasswordResetToken database table model."""

from datetime import datetime

from sqlmodel import Field

from src.sustainareview.entities._base import EntityTable, utcnow


class PasswordResetTokenTable(EntityTable, table=True):
    """Database persistence model for password reset tokens."""

    __tablename__ = "password_reset_tokens"

    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    token_hash: str = Field(max_length=64, unique=True, index=True)
    expires_at: datetime
    used_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
