"""Pytest configuration and shared fixtures."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_client() -> MagicMock:
    """
    Provide a mock Supabase client.

    Returns:
        MagicMock standing in for supabase.Client

    Example:
        >>> def test_find(mock_client):
        >>>     mock_client.table().select().eq().limit().execute.return_value.data = []
    """
    return MagicMock()
