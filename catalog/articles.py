"""
Article ordering facade.

Applies ordered reference map semantics to an article's entries and keeps
its named property slots and catalogue memberships. Entry content itself
lives in the entry repository; an article only orders entry ids.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .errors import (
    ArticleAlreadyInCatalogueError,
    ArticleNotFoundError,
    ArticleNotInCatalogueError,
    ArticleTitleTakenError,
    DuplicateReferenceError,
    EntryAlreadyInArticleError,
    EntryNotInArticleError,
    PropertyNotFoundError,
    ReferenceNotFoundError,
)
from .ids import generate_unique_id, uuid_generator
from .models import Article
from .requests import ArticleRequest

logger = logging.getLogger(__name__)


class ArticleOrderingFacade:
    """Creates articles and orders their entries."""

    def __init__(
        self,
        articles,
        id_generator: Callable[[], str] = uuid_generator,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize facade.

        Args:
            articles: Article repository (find_by_id, find_by_title, save, delete)
            id_generator: Produces ids for new articles
            clock: Produces creation dates
        """
        self.articles = articles
        self.id_generator = id_generator
        self.clock = clock

    def create(self, request: ArticleRequest) -> Article:
        """Create an article.

        Raises:
            ArticleTitleTakenError: If another article has exactly this title
        """
        if self.articles.find_by_title(request.title) is not None:
            raise ArticleTitleTakenError(request.title)

        article = Article(
            id=generate_unique_id(self.articles, self.id_generator),
            title=request.title,
            creation_date=self.clock(),
            catalogues=set(request.catalogues),
        )

        self.articles.save(article)
        logger.info(f"Created article '{article.title}' ({article.id})")
        return article

    def get(self, article_id: str) -> Optional[Article]:
        return self.articles.find_by_id(article_id)

    def get_or_raise(self, article_id: str) -> Article:
        article = self.articles.find_by_id(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    def change_title(self, article_id: str, new_title: str) -> Article:
        article = self.get_or_raise(article_id)

        holder = self.articles.find_by_title(new_title)
        if holder is not None and holder.id != article.id:
            raise ArticleTitleTakenError(new_title)

        article.title = new_title
        return self.articles.save(article)

    def delete(self, article_id: str) -> Article:
        """Delete an article; its entries are left for the caller to clean up."""
        article = self.get_or_raise(article_id)
        self.articles.delete(article.id)
        logger.info(f"Deleted article '{article.title}' ({article.id})")
        return article

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def append_entry(self, article_id: str, entry_id: str) -> Article:
        article = self.get_or_raise(article_id)

        try:
            article.entries.append(entry_id)
        except DuplicateReferenceError as exc:
            raise EntryAlreadyInArticleError(article.id, entry_id) from exc

        return self.articles.save(article)

    def remove_entry(self, article_id: str, entry_id: str) -> Article:
        article = self.get_or_raise(article_id)

        try:
            article.entries.remove(entry_id)
        except ReferenceNotFoundError as exc:
            raise EntryNotInArticleError(article.id, entry_id) from exc

        return self.articles.save(article)

    def switch_entries(self, article_id: str, first_id: str, second_id: str) -> Article:
        article = self.get_or_raise(article_id)

        try:
            article.entries.swap(first_id, second_id)
        except ReferenceNotFoundError as exc:
            raise EntryNotInArticleError(article.id, exc.reference) from exc

        return self.articles.save(article)

    def ordered_entries(self, article_id: str) -> List[str]:
        return self.get_or_raise(article_id).entries.ordered()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def attach_property(self, article_id: str, property_name: str, entry_id: str) -> Article:
        """Point a named property slot at an entry, replacing any previous one."""
        article = self.get_or_raise(article_id)
        article.properties[property_name] = entry_id
        return self.articles.save(article)

    def detach_property(self, article_id: str, property_name: str) -> Tuple[Article, str]:
        """Clear a property slot.

        Returns:
            The updated article and the id of the entry the slot pointed at

        Raises:
            PropertyNotFoundError: If the article has no such property
        """
        article = self.get_or_raise(article_id)

        if property_name not in article.properties:
            raise PropertyNotFoundError(article.id, property_name)

        entry_id = article.properties.pop(property_name)
        return self.articles.save(article), entry_id

    # ------------------------------------------------------------------
    # Catalogue membership
    # ------------------------------------------------------------------

    def add_catalogue(self, article_id: str, catalogue_id: str) -> Article:
        """Record membership of a catalogue on the article.

        Only Article.catalogues changes; the caller also lists the article
        in the catalogue with CatalogueHierarchyManager.append_article.

        Raises:
            ArticleAlreadyInCatalogueError: If the membership already exists
        """
        article = self.get_or_raise(article_id)

        if catalogue_id in article.catalogues:
            raise ArticleAlreadyInCatalogueError(catalogue_id, article.id)

        article.catalogues.add(catalogue_id)
        return self.articles.save(article)

    def remove_catalogue(self, article_id: str, catalogue_id: str) -> Article:
        article = self.get_or_raise(article_id)

        if catalogue_id not in article.catalogues:
            raise ArticleNotInCatalogueError(catalogue_id, article.id)

        article.catalogues.discard(catalogue_id)
        return self.articles.save(article)
