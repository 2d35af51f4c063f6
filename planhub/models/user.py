"""User and Purchase records."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from planhub.models.base import Record

Role = Literal["user", "admin"]


def normalize_email(email: str) -> str:
    """Lowercase, trimmed email used as the unique user key."""
    return email.strip().lower()


class Purchase(Record):
    """A plan purchase. Immutable once appended to a user."""

    id: str
    plan_id: str
    purchased_at: datetime


class User(Record):
    """
    User account keyed by normalized email.

    role is None only for legacy records written before roles existed;
    services fill it from the configured admin address on first touch.
    password holds a legacy plaintext password until it is re-hashed.
    """

    email: str
    name: str = ""
    password_hash: str | None = None
    password: str | None = None
    role: Role | None = None
    approved: bool = False
    plan_id: str | None = None
    purchases: list[Purchase] = Field(default_factory=list)
    created_at: datetime | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("purchases", mode="before")
    @classmethod
    def coerce_purchases(cls, v: object) -> object:
        # Older documents may carry null or a non-list here
        return v if isinstance(v, list) else []
