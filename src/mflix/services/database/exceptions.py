"""Custom exceptions for document store operations."""


class DocumentStoreError(Exception):
    """Base exception for document store errors."""

    pass


class MissingDocumentIdError(DocumentStoreError):
    """Raised when a single-document write matches a row without a surrogate id."""

    pass
