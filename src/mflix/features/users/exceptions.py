"""Custom exceptions for user and session persistence."""


class UserStoreError(Exception):
    """Base exception for all user store errors."""

    pass


class PersistenceError(UserStoreError):
    """Raised when a write is rejected by the document store or not acknowledged."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
