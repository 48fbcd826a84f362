"""Paste data models.

This module defines the Paste model for storing pastes and the expiry rules
shared by every storage backend.
"""
from typing import Any, Optional

from pydantic import field_validator
from sqlalchemy import BigInteger, Column, Text
from sqlmodel import Field, SQLModel

# Upper bounds for the optional limits. A TTL beyond MAX_TTL_SECONDS would put
# the expiry time past what datetime can represent; MAX_VIEWS is the BIGINT range.
MAX_TTL_SECONDS = 10 ** 10
MAX_VIEWS = 2 ** 63 - 1

LIMIT_BOUNDS = {
    "ttl_seconds": MAX_TTL_SECONDS,
    "max_views": MAX_VIEWS,
}


def normalize_limit(name: str, value: Any) -> int:
    """
    Validate a ``ttl_seconds`` or ``max_views`` value.

    Integral floats such as ``5.0`` are accepted and returned as ints; bools,
    fractions, strings and out-of-range numbers are not.

    Raises:
        ValueError: With the client-facing message for ``name``
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= LIMIT_BOUNDS[name]:
        raise ValueError(f"{name} must be an integer >= 1")
    return value


class PasteBase(SQLModel):
    """Base model for paste data."""

    content: str = Field(description="The pasted text")
    ttl_seconds: Optional[int] = Field(
        default=None,
        description="Seconds after creation before the paste expires (null means no TTL)"
    )
    max_views: Optional[int] = Field(
        default=None,
        description="Number of successful views before the paste expires (null means unlimited)"
    )


class Paste(PasteBase, table=True):
    """
    Paste model for storing pastes in the database.

    ``created_at`` is kept in milliseconds since the epoch so that expiry can
    be evaluated with integer arithmetic against an overridable clock.
    ``current_views`` only grows, one step per successful view.
    """

    __tablename__ = "pastes"

    id: str = Field(primary_key=True, max_length=64)
    content: str = Field(sa_column=Column(Text, nullable=False))
    created_at: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Creation time in milliseconds since the epoch"
    )
    ttl_seconds: Optional[int] = Field(default=None, sa_column=Column(BigInteger, nullable=True))
    max_views: Optional[int] = Field(default=None, sa_column=Column(BigInteger, nullable=True))
    current_views: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Number of successful views so far"
    )

    def is_expired(self, now_ms: int) -> bool:
        """Check if the paste has expired at ``now_ms``.

        TTL is checked first and is strict: a paste fetched exactly
        ``ttl_seconds`` after creation is still valid. The view limit is
        reached once ``current_views >= max_views``.

        Returns:
            bool: True if the paste has expired, False otherwise
        """
        if self.ttl_seconds is not None:
            if now_ms - self.created_at > self.ttl_seconds * 1000:
                return True

        if self.max_views is not None and self.current_views >= self.max_views:
            return True

        return False

    def expires_at_ms(self) -> Optional[int]:
        """Absolute expiry time in ms, or None when the paste has no TTL."""
        if self.ttl_seconds is None:
            return None
        return self.created_at + self.ttl_seconds * 1000

    def remaining_views(self) -> Optional[int]:
        """Views left after the ones already counted, or None when unlimited."""
        if self.max_views is None:
            return None
        return max(self.max_views - self.current_views, 0)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at,
            "ttl_seconds": self.ttl_seconds,
            "max_views": self.max_views,
            "current_views": self.current_views,
        }


class PasteCreate(PasteBase):
    """Schema for creating a new paste."""
    pass


class PasteView(SQLModel):
    """A paste as shown to a reader, after their view has been counted."""
    id: str
    content: str
    remaining_views: Optional[int] = None
    expires_at: Optional[str] = None


class PasteUpdate(SQLModel):
    """Schema for updating a paste. Content, id and creation time are immutable."""
    current_views: Optional[int] = None
    ttl_seconds: Optional[int] = None
    max_views: Optional[int] = None

    @field_validator("current_views")
    def non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("current_views must be >= 0")
        return v
