"""
Core data models.

Store documents use camelCase field names
(``isPublic``, ``userId``, ``teaId``, ``passwordHash``); the models expose
snake_case attributes and convert at the store boundary.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from steep.errors import ValidationError


# =============================================================================
# Enums
# =============================================================================


class TeaType(str, Enum):
    """Closed set of tea types."""

    BLACK = "Black"
    GREEN = "Green"
    WHITE = "White"
    TISANE = "Tisane"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> TeaType:
        try:
            return cls(value)
        except ValueError:
            raise ValidationError("Invalid tea type") from None


# =============================================================================
# Documents
# =============================================================================


class _Document(BaseModel):
    """Base for models that round-trip through the document store."""

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]):
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Stored fields under their store names; the store owns the id."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"}, exclude_none=True)


class Tea(_Document):
    """A tea in someone's collection."""

    id: str
    brand: str
    name: str
    type: TeaType
    is_public: bool = Field(default=False, alias="isPublic")
    rating: float = 0.0
    user_id: str = Field(alias="userId")


class Brew(_Document):
    """One brewing session of a tea."""

    id: str
    timestamp: str
    temperature: int
    dose: float
    time: int
    rating: float
    notes: str = ""
    tea_id: str = Field(alias="teaId")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _timestamp_to_str(cls, value: Any) -> Any:
        # Firestore hands back datetimes
        if isinstance(value, datetime):
            return value.isoformat()
        return value


class UserRecord(_Document):
    """A stored user. The password hash never leaves the service layer."""

    id: str
    email: str
    password_hash: str = Field(alias="passwordHash")
    picture: str | None = None
