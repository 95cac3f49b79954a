"""CRUD operations for Follow."""

from datetime import datetime, timezone
from typing import List, Optional

from app.core.storage import LocalStore, StorageKeys
from app.crud.base import CRUDBase, generate_id, load_records
from app.schemas.follow import Follow, FollowToggleResult
from app.schemas.user import User


class CRUDFollow(CRUDBase[Follow, dict, dict]):
    """CRUD operations for the follow graph."""

    def get_follow(self, store: LocalStore, *, follower_id: str, following_id: str) -> Optional[Follow]:
        for follow in self.load(store).values():
            if follow.follower_id == follower_id and follow.following_id == following_id:
                return follow
        return None

    def is_following(self, store: LocalStore, *, follower_id: str, following_id: str) -> bool:
        return self.get_follow(store, follower_id=follower_id, following_id=following_id) is not None

    def toggle_follow(self, store: LocalStore, *, follower_id: str, following_id: str) -> FollowToggleResult:
        """Follow or unfollow a user."""
        with store.transaction():
            follows = self.load(store)
            existing = next(
                (f for f in follows.values() if f.follower_id == follower_id and f.following_id == following_id),
                None,
            )
            if existing:
                del follows[existing.id]
                following = False
            else:
                follow = Follow(
                    id=generate_id(),
                    follower_id=follower_id,
                    following_id=following_id,
                    created_at=datetime.now(timezone.utc),
                )
                follows[follow.id] = follow
                following = True
            self.save(store, follows)
        return FollowToggleResult(following=following)

    def _resolve_users(self, store: LocalStore, user_ids: List[str]) -> List[User]:
        users = load_records(store, User, StorageKeys.USERS)
        return [users[user_id] for user_id in user_ids if user_id in users]

    def get_followers(self, store: LocalStore, *, user_id: str) -> List[User]:
        """Users following `user_id`."""
        follower_ids = [f.follower_id for f in self.filter_by(store, following_id=user_id)]
        return self._resolve_users(store, follower_ids)

    def get_following(self, store: LocalStore, *, user_id: str) -> List[User]:
        """Users that `user_id` follows."""
        following_ids = [f.following_id for f in self.filter_by(store, follower_id=user_id)]
        return self._resolve_users(store, following_ids)


# Singleton instance
crud_follow = CRUDFollow(Follow, StorageKeys.FOLLOWS)
