"""User domain entity."""

from typing import Any

from pydantic import Field

from src.sustainareview.entities._base import TimestampedEntity


class User(TimestampedEntity):
    """A registered account.

    The password hash travels with the entity so the auth service can verify
    credentials, but it is never serialized.
    """

    username: str = Field(description="Unique public name")
    email: str = Field(description="Unique login email, stored lowercase")
    password_hash: str = Field(default="", exclude=True, repr=False)

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.username == other.username
            and self.email == other.email
        )

    def __hash__(self) -> int:
        return hash((self.id, self.username, self.email))
