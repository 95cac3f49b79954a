"""Pydantic schemas for Article."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import StoredRecord
from .user import PublicUser


class Article(StoredRecord):
    """Stored article record."""
    id: str
    title: str
    content: str
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    author_id: str
    tags: Optional[List[str]] = None
    likes: int = 0
    views: int = 0
    published: bool = False
    created_at: datetime
    updated_at: datetime


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""
    title: str = Field(..., min_length=1, description="Article title")
    content: str = Field(..., min_length=1, description="Article body (markdown)")
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    author_id: str
    tags: Optional[List[str]] = None
    published: Optional[bool] = None


class ArticleUpdate(BaseModel):
    """Schema for updating an article. Accepts snake_case or stored camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None
    published: Optional[bool] = None


class ArticleFilters(BaseModel):
    """Predicates applied by the article listing, in field order."""
    published: Optional[bool] = None
    author_id: Optional[str] = None
    tag: Optional[str] = None
    search: Optional[str] = None


class ArticleWithAuthor(Article):
    """Article joined to its author."""
    author: PublicUser
    comments_count: int = 0
    is_liked: Optional[bool] = None  # Populated only when a viewer is known
