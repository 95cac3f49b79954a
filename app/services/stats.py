"""Aggregate numbers shown on the dashboard and profile pages."""

from typing import Optional

from pydantic import BaseModel

from app.core.storage import LocalStore
from app.crud import crud_article, crud_follow, crud_user
from app.schemas.article import ArticleFilters
from app.schemas.user import PublicUser


class DashboardStats(BaseModel):
    """Totals over every article an author owns, drafts included."""
    published_articles: int = 0
    draft_articles: int = 0
    total_views: int = 0
    total_likes: int = 0
    total_comments: int = 0


class ProfileStats(BaseModel):
    """Public profile numbers; only published articles count."""
    user: PublicUser
    articles_count: int = 0
    total_views: int = 0
    total_likes: int = 0
    followers_count: int = 0
    following_count: int = 0


def get_dashboard_stats(store: LocalStore, *, user_id: str) -> DashboardStats:
    articles = crud_article.get_articles(store, ArticleFilters(author_id=user_id))
    published = [a for a in articles if a.published]
    return DashboardStats(
        published_articles=len(published),
        draft_articles=len(articles) - len(published),
        total_views=sum(a.views for a in articles),
        total_likes=sum(a.likes for a in articles),
        total_comments=sum(a.comments_count for a in articles),
    )


def get_profile_stats(store: LocalStore, *, user_id: str) -> Optional[ProfileStats]:
    """Return None when the user does not exist."""
    user = crud_user.get(store, user_id)
    if user is None:
        return None

    articles = crud_article.get_articles(store, ArticleFilters(author_id=user_id, published=True))
    return ProfileStats(
        user=user.to_public(),
        articles_count=len(articles),
        total_views=sum(a.views for a in articles),
        total_likes=sum(a.likes for a in articles),
        followers_count=len(crud_follow.get_followers(store, user_id=user_id)),
        following_count=len(crud_follow.get_following(store, user_id=user_id)),
    )
