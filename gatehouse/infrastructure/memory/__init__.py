"""In-memory adapters for the access domain ports."""

from .di import MemoryStorageProvider
from .model_registry import InMemoryModelRegistry
from .repository import InMemoryRoleMappingRepository, InMemoryRoleRepository
from .store import InMemoryRecordStore

__all__ = [
    "InMemoryModelRegistry",
    "InMemoryRecordStore",
    "InMemoryRoleMappingRepository",
    "InMemoryRoleRepository",
    "MemoryStorageProvider",
]
