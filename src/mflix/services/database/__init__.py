"""Document store connection and client."""

from src.mflix.services.database.connection import get_supabase_admin_client, get_supabase_client
from src.mflix.services.database.exceptions import DocumentStoreError, MissingDocumentIdError
from src.mflix.services.database.models import DeleteResult, InsertResult, UpdateResult
from src.mflix.services.database.utils import SupabaseDocumentStore, get_document_store

__all__ = [
    "get_supabase_client",
    "get_supabase_admin_client",
    "SupabaseDocumentStore",
    "get_document_store",
    "InsertResult",
    "DeleteResult",
    "UpdateResult",
    "DocumentStoreError",
    "MissingDocumentIdError",
]
