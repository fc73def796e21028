"""Entity: PasswordResetToken."""

from datetime import datetime

from pydantic import Field

from src.sustainareview.entities._base import Entity, ensure_utc, utcnow


class PasswordResetToken(Entity):
    """A single-use password reset grant.

    Only the SHA-256 digest of the emailed token is kept.
    """

    user_id: str
    token_hash: str
    expires_at: datetime
    used_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= ensure_utc(self.expires_at)

    def is_usable(self, now: datetime | None = None) -> bool:
        return self.used_at is None and not self.is_expired(now)
