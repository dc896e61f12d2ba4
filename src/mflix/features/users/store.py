"""Persistence of users and their login sessions."""

import logging
from typing import Any

from src.mflix.config import settings
from src.mflix.features.users.exceptions import PersistenceError
from src.mflix.features.users.models import Session, User
from src.mflix.services.database import SupabaseDocumentStore, get_document_store

logger = logging.getLogger(__name__)


class UserStore:
    """
    Gateway for all user and session persistence.

    Users are keyed by email, sessions by user_id. Across mflix the user_id of a
    session is the user's email, which is what lets delete_user cascade to the
    user's sessions.

    Error policy:
        - Inserts and preference updates fail loud with PersistenceError.
        - Deletes fail soft: errors are logged and reported as False.
        - Lookups return None when nothing matches.

    At most one session per user is kept: create_user_session removes existing
    sessions before inserting. The two steps are not atomic, so concurrent logins
    for the same user can transiently leave two sessions or none.
    """

    def __init__(
        self,
        store: SupabaseDocumentStore,
        users_collection: str = "users",
        sessions_collection: str = "sessions",
    ) -> None:
        """
        Initialize user store.

        Args:
            store: Document store client, shared for the lifetime of the store
            users_collection: Name of the users collection
            sessions_collection: Name of the sessions collection
        """
        self.store = store
        self.users_collection = users_collection
        self.sessions_collection = sessions_collection

    def add_user(self, user: User) -> bool:
        """
        Insert a new user document.

        Email uniqueness is enforced by the unique index on the users collection.

        Args:
            user: User to add

        Returns:
            True if the insert was acknowledged

        Raises:
            PersistenceError: If the insert is rejected (e.g. duplicate email) or not acknowledged
        """
        try:
            result = self.store.insert_one(self.users_collection, user.to_document())
        except Exception as e:
            logger.error(f"Couldn't insert user: {e}", extra={"email": user.email})
            raise PersistenceError("Couldn't insert user", cause=e) from e

        if not result.acknowledged:
            logger.error("User insert was not acknowledged", extra={"email": user.email})
            raise PersistenceError("Couldn't insert user")

        logger.info("User added", extra={"email": user.email})
        return True

    def create_user_session(self, user_id: str, jwt: str) -> bool:
        """
        Create the session for a user, replacing any existing one.

        Args:
            user_id: User identifier (the user's email)
            jwt: Issued token

        Returns:
            True if the new session insert was acknowledged

        Raises:
            PersistenceError: If the session insert fails
        """
        self.delete_user_sessions(user_id)

        session = Session(user_id=user_id, jwt=jwt)
        try:
            result = self.store.insert_one(self.sessions_collection, session.to_document())
        except Exception as e:
            logger.error(f"Couldn't create session: {e}", extra={"user_id": user_id})
            raise PersistenceError("Couldn't create user session", cause=e) from e

        if result.acknowledged:
            logger.info("Session created", extra={"user_id": user_id})
        return result.acknowledged

    def get_user(self, email: str) -> User | None:
        """Return the user with this exact email, or None."""
        document = self.store.find_one(self.users_collection, {"email": email})
        return User.from_document(document) if document else None

    def get_user_session(self, user_id: str) -> Session | None:
        """
        Return the session of a user, or None.

        If more than one session exists for user_id, the first one in the
        collection's natural storage order is returned.
        """
        document = self.store.find_one(self.sessions_collection, {"user_id": user_id})
        return Session.from_document(document) if document else None

    def count_user_sessions(self, user_id: str) -> int:
        """Number of sessions stored for a user."""
        return self.store.count(self.sessions_collection, {"user_id": user_id})

    def delete_user_sessions(self, user_id: str) -> bool:
        """
        Remove every session of a user.

        Args:
            user_id: User identifier

        Returns:
            True if at least one session was removed, False otherwise (including on error)
        """
        try:
            result = self.store.delete_many(self.sessions_collection, {"user_id": user_id})
        except Exception as e:
            logger.error(
                f"There was an error while deleting user's sessions: {e}",
                exc_info=True,
                extra={"user_id": user_id},
            )
            return False
        return result.deleted_count > 0

    def delete_user(self, email: str) -> bool:
        """
        Remove a user document together with the user's sessions.

        Args:
            email: Email of the user to delete

        Returns:
            True if the user document was removed, False otherwise (including on error)
        """
        self.delete_user_sessions(email)

        try:
            result = self.store.delete_one(self.users_collection, {"email": email})
        except Exception as e:
            logger.error(
                f"There was an error while deleting the user: {e}",
                exc_info=True,
                extra={"email": email},
            )
            return False

        if result.deleted_count > 0:
            logger.info("User deleted", extra={"email": email})
            return True
        return False

    def update_user_preferences(self, email: str, preferences: dict[str, Any]) -> bool:
        """
        Replace the preferences of a user.

        The whole preferences sub-document is overwritten, never merged. A user
        document is upserted when no user matches email.

        Args:
            email: Email of the user to update
            preferences: New preferences; pass an empty mapping to clear them

        Returns:
            True if an existing user document was modified

        Raises:
            ValueError: If preferences is None
            PersistenceError: If the update fails
        """
        if preferences is None:
            raise ValueError("User preferences cannot be None")

        try:
            result = self.store.update_one(
                self.users_collection,
                {"email": email},
                {"preferences": dict(preferences)},
                upsert=True,
            )
        except Exception as e:
            logger.error(f"Couldn't update user preferences: {e}", extra={"email": email})
            raise PersistenceError("Couldn't update user preferences", cause=e) from e

        return result.modified_count != 0


def get_user_store(store: SupabaseDocumentStore | None = None) -> UserStore:
    """
    Get instance of UserStore configured from settings.

    Args:
        store: Optional document store (uses the configured Supabase client if None)

    Returns:
        UserStore instance

    Example:
        >>> users = get_user_store()
        >>> users.get_user("user@example.com")
    """
    if store is None:
        store = get_document_store(use_admin=settings.use_admin_client)
    return UserStore(
        store,
        users_collection=settings.users_collection,
        sessions_collection=settings.sessions_collection,
    )
