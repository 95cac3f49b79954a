"""CRUD operations for `User` records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from app.core.security import get_password_hash, verify_password
from app.core.storage import LocalStore, StorageKeys
from app.crud.base import CRUDBase, generate_id
from app.schemas.user import User, UserCreate, UserUpdate


OPTIONAL_PROFILE_FIELDS = ("bio", "avatar", "location", "website")


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, store: LocalStore, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        return self.get_by_field(store, "email", email)

    def get_by_username(self, store: LocalStore, username: Optional[str]) -> Optional[User]:
        if not username:
            return None
        return self.get_by_field(store, "username", username)

    def create_user(self, store: LocalStore, *, user_in: UserCreate) -> User:
        user_data = user_in.model_dump(exclude_unset=True)
        raw_password = user_data.pop("password")
        # Empty profile fields are stored as null
        for field in OPTIONAL_PROFILE_FIELDS:
            user_data[field] = user_data.get(field) or None

        db_obj = User(
            id=generate_id(),
            password=get_password_hash(raw_password),
            created_at=datetime.now(timezone.utc),
            **user_data,
        )
        with store.transaction():
            users = self.load(store)
            users[db_obj.id] = db_obj
            self.save(store, users)
        return db_obj

    def update(
        self,
        store: LocalStore,
        *,
        id: Any,
        obj_in: Union[UserUpdate, Dict[str, Any]],
    ) -> Optional[User]:
        update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, UserUpdate) else dict(obj_in)
        if update_data.get("password"):
            update_data["password"] = get_password_hash(update_data["password"])
        else:
            update_data.pop("password", None)
        update_data.pop("created_at", None)
        return super().update(store, id=id, obj_in=update_data)

    def authenticate(self, store: LocalStore, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(store, email)
        if not user:
            return None
        if not verify_password(password, user.password):
            return None
        return user


# Singleton instance
crud_user = CRUDUser(User, StorageKeys.USERS)
