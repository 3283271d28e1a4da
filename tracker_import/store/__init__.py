from .base import PersistenceError, ResourceStore
from .memory import MemoryResourceStore
from .rest import RestResourceStore

__all__ = [
    "PersistenceError",
    "ResourceStore",
    "MemoryResourceStore",
    "RestResourceStore",
]
