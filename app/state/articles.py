"""Articles state: the article list, the open article and the feed filters."""

import logging
from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel, ValidationError

from app.core.storage import LocalStore
from app.crud import crud_article, crud_like
from app.schemas.article import ArticleCreate, ArticleFilters, ArticleUpdate, ArticleWithAuthor
from app.state.base import ActionResult

logger = logging.getLogger(__name__)

FeedFilter = Literal["relevant", "latest", "top"]


class ArticlesState(BaseModel):
    articles: List[ArticleWithAuthor] = []
    current_article: Optional[ArticleWithAuthor] = None
    loading: bool = False
    error: Optional[str] = None
    filter: FeedFilter = "relevant"
    search_query: str = ""
    selected_tag: Optional[str] = None


class ArticlesSlice:
    """Article list and detail state driven by the data-access layer."""

    def __init__(self, store: LocalStore):
        self.store = store
        self.state = ArticlesState()

    def _pending(self) -> None:
        self.state.loading = True
        self.state.error = None

    def _rejected(self, message: str) -> ActionResult:
        self.state.loading = False
        self.state.error = message
        return ActionResult.rejected(message)

    def _done(self, payload: Any = None) -> ActionResult:
        self.state.loading = False
        self.state.error = None
        return ActionResult.ok(payload)

    # ----- Actions -----
    def fetch_articles(
        self,
        *,
        search: Optional[str] = None,
        tag: Optional[str] = None,
        published: Optional[bool] = True,
        author_id: Optional[str] = None,
        current_user_id: Optional[str] = None,
    ) -> ActionResult:
        """Load the article list. Only published articles unless told otherwise."""
        self._pending()
        try:
            articles = crud_article.get_articles(
                self.store,
                ArticleFilters(search=search, tag=tag, published=published, author_id=author_id),
                current_user_id=current_user_id,
            )
        except Exception as e:
            logger.error(f"Failed to load articles: {e}")
            return self._rejected("Failed to load articles")
        self.state.articles = articles
        return self._done(articles)

    def fetch_article(self, id: str, *, current_user_id: Optional[str] = None) -> ActionResult:
        """Open one article, counting the visit as a view."""
        self._pending()
        try:
            article = crud_article.get_with_author(self.store, id, current_user_id=current_user_id)
            if article is not None:
                viewed = crud_article.record_view(self.store, id=id)
                if viewed is not None:
                    article.views = viewed.views
        except Exception as e:
            logger.error(f"Failed to load article {id}: {e}")
            return self._rejected("Failed to load article")
        if article is None:
            return self._rejected("Article not found")
        self.state.current_article = article
        return self._done(article)

    def create_article(self, article_in: ArticleCreate) -> ActionResult:
        self._pending()
        try:
            article = crud_article.create_article(self.store, article_in=article_in)
        except Exception as e:
            logger.error(f"Failed to create article: {e}")
            return self._rejected("Failed to create article")
        return self._done(article)

    def update_article(self, id: str, updates: Mapping[str, Any]) -> ActionResult:
        self._pending()
        try:
            article_in = ArticleUpdate.model_validate(dict(updates))
            article = crud_article.update_article(self.store, id=id, obj_in=article_in)
        except ValidationError as e:
            logger.warning(f"Rejected update for article {id}: {e.error_count()} invalid field(s)")
            return self._rejected("Failed to update article")
        except Exception as e:
            logger.error(f"Failed to update article {id}: {e}")
            return self._rejected("Failed to update article")
        if article is None:
            return self._rejected("Article not found")

        changes = article.model_dump(exclude={"id", "author_id", "created_at"})
        for index, listed in enumerate(self.state.articles):
            if listed.id == article.id:
                self.state.articles[index] = listed.model_copy(update=changes)
        if self.state.current_article and self.state.current_article.id == article.id:
            self.state.current_article = self.state.current_article.model_copy(update=changes)
        return self._done(article)

    def delete_article(self, id: str) -> ActionResult:
        self._pending()
        try:
            deleted = crud_article.delete_article(self.store, id=id)
        except Exception as e:
            logger.error(f"Failed to delete article {id}: {e}")
            return self._rejected("Failed to delete article")
        if not deleted:
            return self._rejected("Article not found")

        self.state.articles = [a for a in self.state.articles if a.id != id]
        if self.state.current_article and self.state.current_article.id == id:
            self.state.current_article = None
        return self._done(id)

    def toggle_like(self, *, article_id: str, user_id: str) -> ActionResult:
        """Toggle a like and mirror the new count into the loaded articles.

        Loading state is left alone so the page does not flicker.
        """
        try:
            result = crud_like.toggle_like(self.store, user_id=user_id, article_id=article_id)
        except Exception as e:
            logger.error(f"Failed to toggle like on {article_id}: {e}")
            self.state.error = "Failed to toggle like"
            return ActionResult.rejected("Failed to toggle like")

        for article in self.state.articles:
            if article.id == article_id:
                article.likes = result.likes_count
                article.is_liked = result.liked
        if self.state.current_article and self.state.current_article.id == article_id:
            self.state.current_article.likes = result.likes_count
            self.state.current_article.is_liked = result.liked
        return ActionResult.ok(result)

    # ----- Reducers -----
    def set_filter(self, value: FeedFilter) -> None:
        self.state.filter = value

    def set_search_query(self, value: str) -> None:
        self.state.search_query = value

    def set_selected_tag(self, value: Optional[str]) -> None:
        self.state.selected_tag = value

    def clear_current_article(self) -> None:
        self.state.current_article = None

    def clear_error(self) -> None:
        self.state.error = None

    # ----- Selectors -----
    def sorted_articles(self) -> List[ArticleWithAuthor]:
        """Loaded articles ordered for the home feed tab."""
        if self.state.filter == "latest":
            key = lambda a: a.created_at
        elif self.state.filter == "top":
            key = lambda a: a.likes
        else:  # relevant (default)
            key = lambda a: a.views
        return sorted(self.state.articles, key=key, reverse=True)
