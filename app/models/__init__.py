"""
SQLAlchemy Models for DevCommunity
"""

from ..database import Base
from .storage_entry import StorageEntry

# Export all models
__all__ = [
    "Base",
    "StorageEntry",
]
