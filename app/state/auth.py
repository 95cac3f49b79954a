"""Authentication state: the current user and the login/register actions."""

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ValidationError

from app.core.storage import LocalStore
from app.crud import crud_user
from app.schemas.user import LoginRequest, PublicUser, RegisterForm, UserUpdate
from app.services.auth_service import AuthService, auth_service
from app.state.base import ActionResult

logger = logging.getLogger(__name__)


class AuthState(BaseModel):
    user: Optional[PublicUser] = None
    is_authenticated: bool = False
    loading: bool = False
    error: Optional[str] = None


def collect_form_errors(exc: ValidationError) -> Dict[str, str]:
    """Map pydantic errors to one message per form field."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "form"
        if err.get("type") == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        errors.setdefault(field, message)
    return errors


class AuthSlice:
    """Holds the logged-in user and restores it from storage on start-up."""

    def __init__(self, store: LocalStore, service: Optional[AuthService] = None):
        self.store = store
        self.service = service or auth_service
        user = self.service.load_session_user(store)
        self.state = AuthState(user=user, is_authenticated=user is not None)

    def _pending(self) -> None:
        self.state.loading = True
        self.state.error = None

    def _fulfilled(self, user: PublicUser) -> ActionResult:
        self.state.loading = False
        self.state.user = user
        self.state.is_authenticated = True
        self.state.error = None
        return ActionResult.ok(user)

    def _rejected(self, message: str) -> ActionResult:
        self.state.loading = False
        self.state.error = message
        return ActionResult.rejected(message)

    # ----- Actions -----
    def login(self, login_data: LoginRequest) -> ActionResult:
        self._pending()
        try:
            user = self.service.authenticate(self.store, email=login_data.email, password=login_data.password)
            if user is None:
                return self._rejected("Invalid credentials")
            public_user = user.to_public()
            self.service.save_session_user(self.store, public_user)
        except Exception as e:
            logger.error(f"[AUTH] Login failed: {e}")
            return self._rejected("Login failed")
        return self._fulfilled(public_user)

    def register(self, form_data: Mapping[str, Any]) -> ActionResult:
        """Validate the registration form, then create and log in the user.

        Form errors are returned per field and leave the state untouched.
        """
        try:
            form = RegisterForm.model_validate(dict(form_data))
        except ValidationError as e:
            return ActionResult.rejected("Invalid registration form", collect_form_errors(e))

        self._pending()
        try:
            user = self.service.register(self.store, user_in=form.to_user_create())
            if user is None:
                return self._rejected("User already exists")
            public_user = user.to_public()
            self.service.save_session_user(self.store, public_user)
        except Exception as e:
            logger.error(f"[AUTH] Registration failed: {e}")
            return self._rejected("Registration failed")
        return self._fulfilled(public_user)

    # ----- Reducers -----
    def logout(self) -> None:
        self.state.user = None
        self.state.is_authenticated = False
        self.state.error = None
        self.service.clear_session(self.store)

    def clear_error(self) -> None:
        self.state.error = None

    def update_user(self, updates: Mapping[str, Any]) -> Optional[PublicUser]:
        """Merge profile updates into the session user and the stored record."""
        if self.state.user is None:
            return None

        update_data = UserUpdate.model_validate(dict(updates)).model_dump(exclude_unset=True)
        profile_data = {field: value for field, value in update_data.items() if field != "password"}
        self.state.user = self.state.user.model_copy(update=profile_data)
        self.service.save_session_user(self.store, self.state.user)
        crud_user.update(self.store, id=self.state.user.id, obj_in=update_data)
        return self.state.user
