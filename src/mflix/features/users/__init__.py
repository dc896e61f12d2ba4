"""User and session persistence."""

from src.mflix.features.users.exceptions import PersistenceError, UserStoreError
from src.mflix.features.users.models import Session, User
from src.mflix.features.users.store import UserStore, get_user_store

__all__ = [
    "UserStore",
    "get_user_store",
    "User",
    "Session",
    "PersistenceError",
    "UserStoreError",
]
