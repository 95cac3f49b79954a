"""Application state slices."""

from .base import ActionResult
from .auth import AuthSlice, AuthState
from .articles import ArticlesSlice, ArticlesState

__all__ = [
    "ActionResult",
    "AuthSlice",
    "AuthState",
    "ArticlesSlice",
    "ArticlesState",
]
