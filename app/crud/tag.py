"""CRUD operations for Tag."""

from typing import List, Optional

from app.config import settings
from app.core.storage import LocalStore, StorageKeys
from app.crud.base import CRUDBase, generate_id
from app.schemas.tag import DEFAULT_TAG_COLOR, Tag


class CRUDTag(CRUDBase[Tag, dict, dict]):
    """CRUD operations for Tag."""

    def get_all(self, store: LocalStore) -> List[Tag]:
        """Get all tags sorted by name."""
        return sorted(self.load(store).values(), key=lambda tag: tag.name)

    def get_popular(self, store: LocalStore, limit: Optional[int] = None) -> List[Tag]:
        """Get the tags with the highest article counts (POPULAR_TAGS_LIMIT by default)."""
        if limit is None:
            limit = settings.POPULAR_TAGS_LIMIT
        tags = sorted(self.load(store).values(), key=lambda tag: tag.articles_count, reverse=True)
        return tags[:limit]

    def get_by_name(self, store: LocalStore, name: str) -> Optional[Tag]:
        """Get tag by exact (case-sensitive) name."""
        return self.get_by_field(store, "name", name)

    def create_tag(
        self,
        store: LocalStore,
        *,
        name: str,
        color: str = DEFAULT_TAG_COLOR,
        description: str = "",
    ) -> Tag:
        """Create a tag, or return the existing one with the same name."""
        with store.transaction():
            tags = self.load(store)
            for tag in tags.values():
                if tag.name == name:
                    return tag

            tag = Tag(id=generate_id(), name=name, description=description, color=color, articles_count=0)
            tags[tag.id] = tag
            self.save(store, tags)
        return tag


# Singleton instance
crud_tag = CRUDTag(Tag, StorageKeys.TAGS)
