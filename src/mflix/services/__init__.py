"""Shared services module for external integrations."""
