"""Review input models."""

from pydantic import BaseModel, Field, field_validator

_RATINGS = ("overall_rating", "sustainability_rating", "ethical_rating", "durability_rating")


def _empty_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class ReviewDraft(BaseModel):
    """A new review as submitted by a user."""

    title: str = Field(max_length=255)
    body: str
    overall_rating: int = Field(ge=1, le=5)
    sustainability_rating: int | None = Field(default=None, ge=1, le=5)
    ethical_rating: int | None = Field(default=None, ge=1, le=5)
    durability_rating: int | None = Field(default=None, ge=1, le=5)

    @field_validator("title", "body")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return _require_text(value)

    @field_validator(*_RATINGS, mode="before")
    @classmethod
    def _blank_rating(cls, value):
        return _empty_to_none(value)


class ReviewUpdate(BaseModel):
    """Partial edit of an existing review; omitted fields keep their value."""

    title: str | None = Field(default=None, max_length=255)
    body: str | None = None
    overall_rating: int | None = Field(default=None, ge=1, le=5)
    sustainability_rating: int | None = Field(default=None, ge=1, le=5)
    ethical_rating: int | None = Field(default=None, ge=1, le=5)
    durability_rating: int | None = Field(default=None, ge=1, le=5)

    @field_validator("title", "body")
    @classmethod
    def _strip_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _require_text(value)


class VoteRequest(BaseModel):
    vote_type: str
