"""CRUD operations for Article."""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Union

from app.config import settings
from app.core.storage import LocalStore, StorageKeys
from app.crud.base import CRUDBase, generate_id, load_records, save_records
from app.schemas.article import (
    Article,
    ArticleCreate,
    ArticleFilters,
    ArticleUpdate,
    ArticleWithAuthor,
)
from app.schemas.comment import Comment
from app.schemas.like import Like
from app.schemas.tag import DEFAULT_TAG_COLOR, Tag
from app.schemas.user import User

logger = logging.getLogger(__name__)

# Fields that never change through update_article
IMMUTABLE_FIELDS = ("id", "author_id", "created_at")


class CRUDArticle(CRUDBase[Article, ArticleCreate, ArticleUpdate]):
    """CRUD operations for Article."""

    def _comment_counts(self, store: LocalStore) -> Counter:
        comments = load_records(store, Comment, StorageKeys.COMMENTS)
        return Counter(comment.article_id for comment in comments.values())

    def _liked_article_ids(self, store: LocalStore, user_id: Optional[str]) -> Optional[Set[str]]:
        if not user_id:
            return None
        likes = load_records(store, Like, StorageKeys.LIKES)
        return {like.article_id for like in likes.values() if like.user_id == user_id}

    def _with_author(
        self,
        article: Article,
        users: Dict[str, User],
        comment_counts: Counter,
        liked_ids: Optional[Set[str]],
    ) -> Optional[ArticleWithAuthor]:
        """Join an article to its author; orphaned articles yield None."""
        author = users.get(article.author_id)
        if author is None:
            return None
        return ArticleWithAuthor(
            **article.model_dump(),
            author=author.to_public(),
            comments_count=comment_counts.get(article.id, 0),
            is_liked=(article.id in liked_ids) if liked_ids is not None else None,
        )

    def get_with_author(
        self,
        store: LocalStore,
        id: str,
        *,
        current_user_id: Optional[str] = None,
    ) -> Optional[ArticleWithAuthor]:
        """Get one article with its author and comment count."""
        article = self.get(store, id)
        if article is None:
            return None
        users = load_records(store, User, StorageKeys.USERS)
        return self._with_author(
            article,
            users,
            self._comment_counts(store),
            self._liked_article_ids(store, current_user_id),
        )

    def get_articles(
        self,
        store: LocalStore,
        filters: Optional[ArticleFilters] = None,
        *,
        current_user_id: Optional[str] = None,
    ) -> List[ArticleWithAuthor]:
        """List articles matching the filters, newest first.

        Filters run in order: published flag, author, tag membership
        (case-sensitive), then a case-insensitive substring search over
        title and content. Articles whose author is missing are dropped.
        """
        filters = filters or ArticleFilters()
        articles = list(self.load(store).values())

        if filters.published is not None:
            articles = [a for a in articles if a.published == filters.published]

        if filters.author_id:
            articles = [a for a in articles if a.author_id == filters.author_id]

        if filters.tag:
            articles = [a for a in articles if a.tags and filters.tag in a.tags]

        if filters.search:
            search = filters.search.lower()
            articles = [
                a for a in articles
                if search in a.title.lower() or search in a.content.lower()
            ]

        users = load_records(store, User, StorageKeys.USERS)
        comment_counts = self._comment_counts(store)
        liked_ids = self._liked_article_ids(store, current_user_id)

        results = []
        for article in articles:
            enriched = self._with_author(article, users, comment_counts, liked_ids)
            if enriched is not None:
                results.append(enriched)

        results.sort(key=lambda a: a.created_at, reverse=True)
        return results

    def create_article(
        self,
        store: LocalStore,
        *,
        article_in: ArticleCreate,
        auto_create_tags: Optional[bool] = None,
    ) -> Article:
        """Create an article and bump the article count of each known tag.

        Tag names with no matching Tag are skipped unless auto_create_tags
        (default: settings.AUTO_CREATE_TAGS) is on, in which case they are
        registered with a count of one.
        """
        if auto_create_tags is None:
            auto_create_tags = settings.AUTO_CREATE_TAGS

        now = datetime.now(timezone.utc)
        article = Article(
            id=generate_id(),
            title=article_in.title,
            content=article_in.content,
            excerpt=article_in.excerpt,
            cover_image=article_in.cover_image,
            author_id=article_in.author_id,
            tags=article_in.tags,
            likes=0,
            views=0,
            published=bool(article_in.published),
            created_at=now,
            updated_at=now,
        )

        with store.transaction():
            articles = self.load(store)
            articles[article.id] = article
            self.save(store, articles)

            if article.tags:
                tags = load_records(store, Tag, StorageKeys.TAGS)
                by_name = {tag.name: tag for tag in tags.values()}
                for tag_name in article.tags:
                    tag = by_name.get(tag_name)
                    if tag is not None:
                        tag.articles_count += 1
                    elif auto_create_tags:
                        tag = Tag(id=generate_id(), name=tag_name, color=DEFAULT_TAG_COLOR, articles_count=1)
                        tags[tag.id] = tag
                        by_name[tag_name] = tag
                    else:
                        logger.debug(f"Tag '{tag_name}' is not registered, skipping counter update")
                save_records(store, Tag, StorageKeys.TAGS, tags)

        return article

    def update_article(
        self,
        store: LocalStore,
        *,
        id: str,
        obj_in: Union[ArticleUpdate, Dict[str, Any]],
    ) -> Optional[Article]:
        """Merge updates into an article and refresh updated_at."""
        update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, ArticleUpdate) else dict(obj_in)
        for field in IMMUTABLE_FIELDS:
            update_data.pop(field, None)
        update_data["updated_at"] = datetime.now(timezone.utc)
        return self.update(store, id=id, obj_in=update_data)

    def delete_article(self, store: LocalStore, *, id: str) -> bool:
        """Delete an article. Tag counters are left as they are."""
        return self.delete(store, id=id)

    def record_view(self, store: LocalStore, *, id: str) -> Optional[Article]:
        """Increment the view counter of an article."""
        with store.transaction():
            articles = self.load(store)
            article = articles.get(id)
            if article is None:
                return None
            article.views += 1
            self.save(store, articles)
        return article


# Singleton instance
crud_article = CRUDArticle(Article, StorageKeys.ARTICLES)
