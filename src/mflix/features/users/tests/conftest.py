"""Shared fixtures for user store tests."""

from typing import Any

import pytest
from postgrest.exceptions import APIError

from src.mflix.features.users import User, UserStore
from src.mflix.services.database.models import DeleteResult, InsertResult, UpdateResult


class InMemoryDocumentStore:
    """Document store double keeping collections as lists in insertion order."""

    def __init__(self, unique_fields: dict[str, str] | None = None) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {}
        self.unique_fields = unique_fields or {}
        self._next_id = 1

    def _matches(self, document: dict[str, Any], filters: dict[str, Any]) -> bool:
        return all(document.get(field) == value for field, value in filters.items())

    def insert_one(self, collection: str, document: dict[str, Any]) -> InsertResult:
        documents = self.collections.setdefault(collection, [])
        unique_field = self.unique_fields.get(collection)
        if unique_field and any(d.get(unique_field) == document.get(unique_field) for d in documents):
            raise APIError(
                {"message": "duplicate key value violates unique constraint", "code": "23505"}
            )
        stored = {"id": self._next_id, **document}
        self._next_id += 1
        documents.append(stored)
        return InsertResult(acknowledged=True, inserted_id=stored["id"])

    def find_one(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        matches = self.find(collection, filters)
        return matches[0] if matches else None

    def find(self, collection: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        return [d for d in self.collections.get(collection, []) if self._matches(d, filters)]

    def count(self, collection: str, filters: dict[str, Any]) -> int:
        return len(self.find(collection, filters))

    def delete_one(self, collection: str, filters: dict[str, Any]) -> DeleteResult:
        match = self.find_one(collection, filters)
        if match is None:
            return DeleteResult(deleted_count=0)
        self.collections[collection].remove(match)
        return DeleteResult(deleted_count=1)

    def delete_many(self, collection: str, filters: dict[str, Any]) -> DeleteResult:
        documents = self.collections.get(collection, [])
        kept = [d for d in documents if not self._matches(d, filters)]
        self.collections[collection] = kept
        return DeleteResult(deleted_count=len(documents) - len(kept))

    def update_one(
        self,
        collection: str,
        filters: dict[str, Any],
        update: dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        match = self.find_one(collection, filters)
        if match is None:
            if upsert:
                self.insert_one(collection, {**filters, **update})
                return UpdateResult(upserted=True)
            return UpdateResult()
        if all(match.get(field) == value for field, value in update.items()):
            return UpdateResult(matched_count=1)
        match.update(update)
        return UpdateResult(matched_count=1, modified_count=1)


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    """In-memory document store with a unique index on users.email."""
    return InMemoryDocumentStore(unique_fields={"users": "email"})


@pytest.fixture
def user_store(document_store: InMemoryDocumentStore) -> UserStore:
    """UserStore over the in-memory document store."""
    return UserStore(document_store)


@pytest.fixture
def sample_user() -> User:
    """Provide a registered user."""
    return User(
        name="Ned Stark",
        email="ned@winterfell.com",
        hashed_password="$2b$12$examplehash",
        preferences={"favourite_cast": "Sean Bean"},
    )
