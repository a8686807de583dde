"""Adapters for on-disk governance records."""

from governance.adapters.entity_store import EntityLoadError, EntityStore

__all__ = ["EntityLoadError", "EntityStore"]
