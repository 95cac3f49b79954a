"""Services package for DevCommunity application."""

from .auth_service import auth_service, AuthService

__all__ = [
    "auth_service",
    "AuthService",
]
