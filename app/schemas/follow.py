"""Pydantic schemas for Follow."""

from datetime import datetime
from pydantic import BaseModel

from .base import StoredRecord


class Follow(StoredRecord):
    """Join record: `follower_id` follows `following_id`."""
    id: str
    follower_id: str
    following_id: str
    created_at: datetime


class FollowToggleResult(BaseModel):
    following: bool
