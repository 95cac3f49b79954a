"""Pydantic schemas for Comment."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .base import StoredRecord
from .user import PublicUser


class Comment(StoredRecord):
    id: str
    content: str
    article_id: str
    author_id: str
    parent_id: Optional[str] = None  # Stored but not used for threading
    created_at: datetime


class CommentCreate(BaseModel):
    """Schema for creating a comment."""
    content: str = Field(..., min_length=1, description="Comment text")
    article_id: str
    author_id: str
    parent_id: Optional[str] = None


class CommentWithAuthor(Comment):
    author: PublicUser
