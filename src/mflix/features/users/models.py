"""User and session documents."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Registered mflix user, keyed by email."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    email: str
    hashed_password: str | None = Field(default=None, alias="password")
    is_admin: bool = Field(default=False, alias="isAdmin")
    preferences: dict[str, Any] | None = None

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored document shape (field aliases, absent optionals omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "User":
        """Build a User from a stored document, ignoring storage-managed fields."""
        return cls.model_validate(document)


class Session(BaseModel):
    """Server-side binding of a user identity to an issued token."""

    model_config = ConfigDict(extra="ignore")

    user_id: str
    jwt: str

    def to_document(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Session":
        return cls.model_validate(document)
