"""
In-memory repositories for lorebook aggregates.

Each repository keeps deep copies of what it is given and hands out deep
copies, so a caller mutating an aggregate never changes stored state until
it saves. commit() applies several saves and deletes as one step, which
the hierarchy manager uses to keep a parent and its child in sync.

Listing follows creation date:
    repo.get_all(SortBy.DESCENDING)               # newest first
    repo.get_paginated(SortBy.ASCENDING, 2, 20)   # items 21..40
"""

from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from catalog.errors import PaginationError
from catalog.models import Article, Catalogue, Entry
from linking.normalizer import normalize_phrase

logger = logging.getLogger(__name__)

T = TypeVar("T", Catalogue, Article, Entry)


class SortBy(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


def _significant_words(text: str) -> set:
    words = set(normalize_phrase(text).split("-"))
    words.discard("")
    return words


class MemoryRepository(Generic[T]):
    """Dictionary-backed store of aggregates keyed by id."""

    def __init__(self, name: str):
        self.name = name
        self._items: Dict[str, T] = {}

    def save(self, item: T) -> T:
        self.commit([item])
        return item

    def commit(self, saved: Iterable[T], deleted: Iterable[str] = ()) -> None:
        """Write a batch of aggregates and remove a batch of ids together.

        The batch is persisted before it becomes visible; if persisting
        fails the repository keeps its previous state.

        Args:
            saved: Aggregates to insert or overwrite
            deleted: Ids to remove (missing ids are ignored)
        """
        staged = dict(self._items)
        for item in saved:
            staged[item.id] = copy.deepcopy(item)
        for item_id in deleted:
            staged.pop(item_id, None)

        self._persist(staged)
        self._items = staged

    def find_by_id(self, item_id: str) -> Optional[T]:
        item = self._items.get(item_id)
        return copy.deepcopy(item) if item is not None else None

    def find_first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for item in self._items.values():
            if predicate(item):
                return copy.deepcopy(item)
        return None

    def delete(self, item_id: str) -> Optional[T]:
        item = self.find_by_id(item_id)
        if item is not None:
            self.commit([], deleted=[item_id])
        return item

    def all(self) -> List[T]:
        return [copy.deepcopy(item) for item in self._items.values()]

    def get_all(self, order: SortBy = SortBy.ASCENDING) -> List[T]:
        """Every stored aggregate sorted by creation date."""
        items = sorted(
            self._items.values(),
            key=lambda item: item.creation_date,
            reverse=SortBy(order) == SortBy.DESCENDING,
        )
        return [copy.deepcopy(item) for item in items]

    def get_paginated(self, order: SortBy, page: int, page_size: int) -> List[T]:
        """One page of aggregates sorted by creation date.

        Args:
            order: Sort direction
            page: 1-based page index
            page_size: Number of aggregates per page

        Returns:
            The page, empty when it starts past the last aggregate

        Raises:
            PaginationError: If page < 1 or page_size < 0
        """
        if page < 1 or page_size < 0:
            raise PaginationError(page, page_size)

        offset = (page - 1) * page_size
        return self.get_all(order)[offset:offset + page_size]

    def _persist(self, items: Dict[str, T]) -> None:
        """Hook for durable subclasses; the memory store keeps nothing else."""

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items


class MemoryCatalogueRepository(MemoryRepository[Catalogue]):
    def __init__(self, name: str = "catalogues"):
        super().__init__(name)

    def find_by_title(self, title: str) -> Optional[Catalogue]:
        return self.find_first(lambda catalogue: catalogue.title == title)


class MemoryArticleRepository(MemoryRepository[Article]):
    def __init__(self, name: str = "articles"):
        super().__init__(name)

    def find_by_title(self, title: str) -> Optional[Article]:
        return self.find_first(lambda article: article.title == title)

    def find_by_catalogue(self, catalogue_id: str) -> List[Article]:
        """Articles that list catalogue_id among their catalogues."""
        return [copy.deepcopy(article) for article in self._items.values() if catalogue_id in article.catalogues]

    def search_by_title(self, text: str) -> List[Article]:
        """Full text search of article titles.

        Returns every article whose title shares at least one significant
        word (stop words and punctuation ignored, case-insensitive) with text.

        Example:
            >>> repo.search_by_title("tutor of Vanessa Strongwill")
            [Article(title='Vanessa Strongwill', ...), Article(title='The Strongwill Family', ...)]
        """
        words = _significant_words(text)
        if not words:
            return []

        matches = [
            copy.deepcopy(article)
            for article in self._items.values()
            if words & _significant_words(article.title)
        ]

        logger.debug(f"Title search matched {len(matches)} of {len(self._items)} articles")
        return matches


class MemoryEntryRepository(MemoryRepository[Entry]):
    def __init__(self, name: str = "entries"):
        super().__init__(name)

    def find_by_article(self, article_id: str) -> List[Entry]:
        return [copy.deepcopy(entry) for entry in self._items.values() if entry.article_id == article_id]

    def search_by_content(self, text: str) -> List[Entry]:
        """Full text search of entry content, same word matching as search_by_title."""
        words = _significant_words(text)
        if not words:
            return []

        return [
            copy.deepcopy(entry)
            for entry in self._items.values()
            if words & _significant_words(entry.content)
        ]
