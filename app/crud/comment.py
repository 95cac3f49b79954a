"""CRUD operations for Comment."""

from datetime import datetime, timezone
from typing import List

from app.core.storage import LocalStore, StorageKeys
from app.crud.base import CRUDBase, generate_id, load_records
from app.schemas.comment import Comment, CommentCreate, CommentWithAuthor
from app.schemas.user import User


class CRUDComment(CRUDBase[Comment, CommentCreate, dict]):
    """CRUD operations for Comment."""

    def create_comment(self, store: LocalStore, *, comment_in: CommentCreate) -> Comment:
        """Create a new comment on an article."""
        comment = Comment(
            id=generate_id(),
            content=comment_in.content,
            article_id=comment_in.article_id,
            author_id=comment_in.author_id,
            parent_id=comment_in.parent_id,
            created_at=datetime.now(timezone.utc),
        )
        with store.transaction():
            comments = self.load(store)
            comments[comment.id] = comment
            self.save(store, comments)
        return comment

    def get_by_article(self, store: LocalStore, *, article_id: str) -> List[CommentWithAuthor]:
        """Get comments for an article with their authors, oldest first.

        Comments whose author no longer exists are dropped.
        """
        users = load_records(store, User, StorageKeys.USERS)
        results = []
        for comment in self.filter_by(store, article_id=article_id):
            author = users.get(comment.author_id)
            if author is None:
                continue
            results.append(CommentWithAuthor(**comment.model_dump(), author=author.to_public()))

        results.sort(key=lambda c: c.created_at)
        return results

    def delete_comment(self, store: LocalStore, *, id: str) -> bool:
        """Delete a comment."""
        return self.delete(store, id=id)


# Singleton instance
crud_comment = CRUDComment(Comment, StorageKeys.COMMENTS)
