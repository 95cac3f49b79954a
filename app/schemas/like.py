"""Pydantic schemas for Like."""

from datetime import datetime
from pydantic import BaseModel

from .base import StoredRecord


class Like(StoredRecord):
    """Join record: `user_id` likes `article_id`."""
    id: str
    user_id: str
    article_id: str
    created_at: datetime


class LikeToggleResult(BaseModel):
    """Result of a like toggle."""
    liked: bool
    likes_count: int
