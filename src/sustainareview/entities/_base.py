import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def new_id() -> str:
    """Opaque string identifier for new rows."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from databases without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Entity(BaseModel):
    """Base entity class with auto-generated UUID identifier."""

    id: str = PydanticField(
        default_factory=new_id,
        description="Unique identifier for the entity",
    )


class TimestampedEntity(Entity):
    """Entity that tracks creation and modification times."""

    created_at: datetime = PydanticField(default_factory=utcnow)
    updated_at: datetime = PydanticField(default_factory=utcnow)


class EntityTable(SQLModel, table=False):
    """Base table with auto-generated UUID primary key."""

    id: str = Field(
        primary_key=True,
        default_factory=new_id,
        max_length=255,
        description="Unique identifier for the entity",
    )


class TimestampedEntityTable(EntityTable, table=False):
    """Base table with creation and modification timestamps."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
