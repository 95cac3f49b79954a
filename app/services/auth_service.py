"""Authentication service: credential checks and the persisted session user."""

import logging
from typing import Optional

from pydantic import ValidationError

from app.core.storage import LocalStore, StorageKeys
from app.crud import crud_user
from app.schemas.user import PublicUser, User, UserCreate

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service for login, registration and session restoration.

    Passwords are verified against salted hashes; there is no token model.
    "Being logged in" means a public copy of the user record is kept under
    the session key so it survives restarts.
    """

    def authenticate(self, store: LocalStore, *, email: str, password: str) -> Optional[User]:
        """Return the user when the email exists and the password matches."""
        user = crud_user.authenticate(store, email=email, password=password)
        if user is None:
            logger.warning(f"[AUTH] Invalid credentials for email: {email}")
            return None
        logger.info(f"[AUTH] User authenticated: id={user.id}, username={user.username}")
        return user

    def register(self, store: LocalStore, *, user_in: UserCreate) -> Optional[User]:
        """Create a user unless the email is already taken."""
        if crud_user.get_by_email(store, user_in.email):
            logger.info(f"[AUTH] Registration refused, email already registered: {user_in.email}")
            return None
        user = crud_user.create_user(store, user_in=user_in)
        logger.info(f"[AUTH] Registered user: id={user.id}, username={user.username}")
        return user

    # ----- Session -----
    def save_session_user(self, store: LocalStore, user: Optional[PublicUser]) -> None:
        """Persist the logged-in user (without password), or clear it when None."""
        if user is None:
            store.remove_item(StorageKeys.CURRENT_USER)
            return
        if isinstance(user, User):
            user = user.to_public()
        store.set_json(StorageKeys.CURRENT_USER, user.to_storage())

    def load_session_user(self, store: LocalStore) -> Optional[PublicUser]:
        """Restore the logged-in user saved by a previous run."""
        data = store.get_json(StorageKeys.CURRENT_USER)
        if not data:
            return None
        try:
            return PublicUser.model_validate(data)
        except ValidationError as e:
            logger.warning(f"[AUTH] Discarding unreadable session user: {e.error_count()} error(s)")
            return None

    def clear_session(self, store: LocalStore) -> None:
        self.save_session_user(store, None)


# Singleton instance
auth_service = AuthService()
