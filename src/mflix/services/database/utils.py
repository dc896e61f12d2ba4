"""Document store operations over Supabase tables."""

import logging
from typing import Any

from supabase import Client

from src.mflix.services.database.connection import get_supabase_admin_client, get_supabase_client
from src.mflix.services.database.exceptions import MissingDocumentIdError
from src.mflix.services.database.models import DeleteResult, InsertResult, UpdateResult

logger = logging.getLogger(__name__)


class SupabaseDocumentStore:
    """
    Collection-style access to Supabase tables.

    Each table plays the role of a collection and each row the role of a document.
    Filters are exact-equality field:value mappings.
    """

    def __init__(self, client: Client | None = None) -> None:
        """
        Initialize document store.

        Args:
            client: Supabase client instance (uses default if None)
        """
        self.client = client or get_supabase_client()

    def _apply_filters(self, query: Any, filters: dict[str, Any]) -> Any:
        for field, value in filters.items():
            query = query.eq(field, value)
        return query

    def _target(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        # Single-document writes only ever address the surrogate key
        if document.get("id") is None:
            raise MissingDocumentIdError(
                f"Matched document in {collection} has no id; refusing to write every match"
            )
        return {"id": document["id"]}

    def insert_one(self, collection: str, document: dict[str, Any]) -> InsertResult:
        """
        Insert a single document.

        Args:
            collection: Collection (table) name
            document: Document fields

        Returns:
            InsertResult, acknowledged when the server echoed the stored row

        Raises:
            Exception: If the server rejects the insert (e.g. unique index violation)

        Example:
            >>> store = SupabaseDocumentStore()
            >>> store.insert_one("sessions", {"user_id": "a@b.com", "jwt": "token"})
        """
        response = self.client.table(collection).insert(document).execute()
        if not response.data:
            return InsertResult(acknowledged=False)
        return InsertResult(acknowledged=True, inserted_id=response.data[0].get("id"))

    def find_one(self, collection: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        """
        Fetch the first document matching filters, in natural storage order.

        Args:
            collection: Collection (table) name
            filters: Dictionary of field:value pairs

        Returns:
            Document dictionary or None if nothing matches

        Example:
            >>> store = SupabaseDocumentStore()
            >>> user = store.find_one("users", {"email": "user@example.com"})
        """
        query = self._apply_filters(self.client.table(collection).select("*"), filters)
        response = query.limit(1).execute()
        return response.data[0] if response.data else None

    def find(self, collection: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Fetch every document matching filters, in natural storage order.

        Args:
            collection: Collection (table) name
            filters: Dictionary of field:value pairs

        Returns:
            List of document dictionaries
        """
        query = self._apply_filters(self.client.table(collection).select("*"), filters)
        return query.execute().data

    def count(self, collection: str, filters: dict[str, Any]) -> int:
        """Count documents matching filters."""
        query = self._apply_filters(
            self.client.table(collection).select("*", count="exact"), filters
        )
        response = query.execute()
        return response.count or 0

    def delete_one(self, collection: str, filters: dict[str, Any]) -> DeleteResult:
        """
        Delete the first document matching filters.

        Args:
            collection: Collection (table) name
            filters: Dictionary of field:value pairs

        Returns:
            DeleteResult with deleted_count 0 or 1

        Raises:
            MissingDocumentIdError: If the matched row has no id to narrow the delete to
        """
        existing = self.find_one(collection, filters)
        if existing is None:
            return DeleteResult(deleted_count=0)

        query = self._apply_filters(
            self.client.table(collection).delete(), self._target(collection, existing)
        )
        response = query.execute()
        return DeleteResult(deleted_count=1 if response.data else 0)

    def delete_many(self, collection: str, filters: dict[str, Any]) -> DeleteResult:
        """
        Delete every document matching filters.

        Args:
            collection: Collection (table) name
            filters: Dictionary of field:value pairs

        Returns:
            DeleteResult with the number of removed documents

        Example:
            >>> store = SupabaseDocumentStore()
            >>> store.delete_many("sessions", {"user_id": "user@example.com"}).deleted_count
            2
        """
        query = self._apply_filters(self.client.table(collection).delete(), filters)
        response = query.execute()
        return DeleteResult(deleted_count=len(response.data))

    def update_one(
        self,
        collection: str,
        filters: dict[str, Any],
        update: dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        """
        Set fields on the first document matching filters.

        Args:
            collection: Collection (table) name
            filters: Dictionary of field:value pairs
            update: Fields to set, each replacing the stored value entirely
            upsert: Insert filters + update as a new document when nothing matches

        Returns:
            UpdateResult describing matched, modified and upserted documents

        Raises:
            MissingDocumentIdError: If the matched row has no id to narrow the update to

        Example:
            >>> store = SupabaseDocumentStore()
            >>> store.update_one(
            ...     "users",
            ...     {"email": "user@example.com"},
            ...     {"preferences": {"favourite_cast": "Robert De Niro"}},
            ...     upsert=True,
            ... )
        """
        existing = self.find_one(collection, filters)

        if existing is None:
            if not upsert:
                return UpdateResult()
            response = self.client.table(collection).insert({**filters, **update}).execute()
            if not response.data:
                logger.warning(
                    f"Upsert into {collection} was not acknowledged",
                    extra={"collection": collection, "filters": list(filters)},
                )
                return UpdateResult()
            logger.info(
                f"Upserted new document into {collection}",
                extra={"collection": collection, "filters": list(filters)},
            )
            return UpdateResult(upserted=True)

        if all(existing.get(field) == value for field, value in update.items()):
            return UpdateResult(matched_count=1)

        query = self._apply_filters(
            self.client.table(collection).update(update), self._target(collection, existing)
        )
        response = query.execute()
        return UpdateResult(matched_count=1, modified_count=1 if response.data else 0)


def get_document_store(client: Client | None = None, use_admin: bool = True) -> SupabaseDocumentStore:
    """
    Get instance of SupabaseDocumentStore.

    Args:
        client: Optional Supabase client (uses default if None)
        use_admin: If True (default), uses admin client that bypasses RLS.
                   Set to False for operations that should respect RLS policies.

    Returns:
        SupabaseDocumentStore instance

    Example:
        >>> store = get_document_store()  # Uses admin client (bypasses RLS)
        >>> user = store.find_one("users", {"email": "user@example.com"})
    """
    if client is None:
        client = get_supabase_admin_client() if use_admin else get_supabase_client()
    return SupabaseDocumentStore(client)
