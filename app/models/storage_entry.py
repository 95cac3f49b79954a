"""StorageEntry model backing the key-value store."""

from sqlalchemy import Column, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class StorageEntry(Base):
    """One stored blob per key, mirroring a browser local storage item."""

    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True, index=True)  # blog_users, blog_articles, ...
    value = Column(Text, nullable=False)  # JSON text

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
