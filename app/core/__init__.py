"""Core module exports."""

from .security import (
    get_password_hash,
    verify_password,
)
from .storage import (
    StorageKeys,
    KeyValueStorage,
    InMemoryStorage,
    DatabaseStorage,
    LocalStore,
    get_store,
)

__all__ = [
    "get_password_hash",
    "verify_password",
    "StorageKeys",
    "KeyValueStorage",
    "InMemoryStorage",
    "DatabaseStorage",
    "LocalStore",
    "get_store",
]
