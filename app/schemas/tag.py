"""Pydantic schemas for Tag."""

from .base import StoredRecord


DEFAULT_TAG_COLOR = "#3b82f6"


class Tag(StoredRecord):
    id: str
    name: str
    description: str = ""
    color: str = DEFAULT_TAG_COLOR
    articles_count: int = 0  # Denormalized, incremented on article creation only
