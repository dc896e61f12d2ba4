"""Pydantic models for document store operation results."""

from typing import Any

from pydantic import BaseModel


class InsertResult(BaseModel):
    """Outcome of a single-document insert."""

    acknowledged: bool
    inserted_id: Any | None = None


class DeleteResult(BaseModel):
    """Outcome of a delete operation."""

    deleted_count: int = 0


class UpdateResult(BaseModel):
    """
    Outcome of a single-document update.

    modified_count only counts existing documents whose values actually changed.
    A document inserted through upsert reports upserted=True and modified_count=0.
    """

    matched_count: int = 0
    modified_count: int = 0
    upserted: bool = False
