"""Project state ownership and JSON persistence."""

from labor_budget.store.entity_store import EntityStore
from labor_budget.store.json_repository import JsonRepository, StorageError

__all__ = ["EntityStore", "JsonRepository", "StorageError"]
