"""CRUD operations package - exports singleton instances for all collections."""

from .base import CRUDBase
from .user import crud_user
from .article import crud_article
from .comment import crud_comment
from .like import crud_like
from .follow import crud_follow
from .tag import crud_tag


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_article",
    "crud_comment",
    "crud_like",
    "crud_follow",
    "crud_tag",
]
