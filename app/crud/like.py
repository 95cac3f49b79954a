"""CRUD operations for Like."""

from datetime import datetime, timezone
from typing import List, Optional

from app.core.storage import LocalStore, StorageKeys
from app.crud.base import CRUDBase, generate_id, load_records, save_records
from app.schemas.article import Article
from app.schemas.like import Like, LikeToggleResult


class CRUDLike(CRUDBase[Like, dict, dict]):
    """CRUD operations for Like."""

    def toggle_like(
        self,
        store: LocalStore,
        *,
        user_id: str,
        article_id: str
    ) -> LikeToggleResult:
        """
        Toggle a user's like on an article.

        The like row and the article's counter are written in one
        transaction. A missing article still gets its like row toggled and
        reports a count of 0.

        Returns:
            LikeToggleResult(liked, likes_count)
        """
        with store.transaction():
            likes = self.load(store)
            articles = load_records(store, Article, StorageKeys.ARTICLES)
            article = articles.get(article_id)

            existing_like = next(
                (like for like in likes.values() if like.user_id == user_id and like.article_id == article_id),
                None,
            )

            if existing_like:
                # Unlike: delete the like
                del likes[existing_like.id]
                if article:
                    article.likes = max(0, article.likes - 1)
                liked = False
            else:
                # Like: create new like
                new_like = Like(
                    id=generate_id(),
                    user_id=user_id,
                    article_id=article_id,
                    created_at=datetime.now(timezone.utc),
                )
                likes[new_like.id] = new_like
                if article:
                    article.likes = article.likes + 1
                liked = True

            if article:
                save_records(store, Article, StorageKeys.ARTICLES, articles)
            self.save(store, likes)

        return LikeToggleResult(liked=liked, likes_count=article.likes if article else 0)

    def get_like(
        self,
        store: LocalStore,
        *,
        user_id: str,
        article_id: str
    ) -> Optional[Like]:
        """Get like record if exists."""
        for like in self.load(store).values():
            if like.user_id == user_id and like.article_id == article_id:
                return like
        return None

    def check_user_liked(self, store: LocalStore, *, user_id: str, article_id: str) -> bool:
        """Check if user has liked an article."""
        return self.get_like(store, user_id=user_id, article_id=article_id) is not None

    def get_user_likes(self, store: LocalStore, *, user_id: str) -> List[str]:
        """Get ids of the articles a user has liked."""
        return [like.article_id for like in self.filter_by(store, user_id=user_id)]


# Singleton instance
crud_like = CRUDLike(Like, StorageKeys.LIKES)
