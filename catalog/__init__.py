"""
Catalog module for the lorebook domain engine.

This module provides functionality for:
- Ordering references densely (OrderedReferenceMap)
- Maintaining the catalogue hierarchy (create, reparent, reorder, delete with fold)
- Ordering an article's entries and managing its property slots
- Creating and editing entries

Data model:
    Catalogue  - title, parent_id, ordered children and articles
    Article    - title, ordered entries, property slots, catalogue memberships
    Entry      - content, explicit links, implicit links

Usage:
    from catalog import CatalogueHierarchyManager, CatalogueRequest
    from store import open_repositories

    repos = open_repositories()
    manager = CatalogueHierarchyManager(repos.catalogues)

    realms = manager.create(CatalogueRequest(title="Realms"))
    cities = manager.create(CatalogueRequest(title="Cities", parent_id=realms.id))
    related = manager.get_related(cities.id)
"""

from .articles import ArticleOrderingFacade
from .entries import EntryService
from .errors import (
    AlreadyChildError,
    ArticleAlreadyInCatalogueError,
    ArticleNotFoundError,
    ArticleNotInCatalogueError,
    ArticleTitleTakenError,
    CatalogueNotFoundError,
    CatalogueTitleTakenError,
    CircularInheritanceError,
    ConflictError,
    DuplicateReferenceError,
    EntityCannotBeCastError,
    EntityNotInTrashError,
    EntryAlreadyInArticleError,
    EntryNotFoundError,
    EntryNotInArticleError,
    InvariantViolationError,
    LorebookError,
    NotAChildError,
    NotFoundError,
    PaginationError,
    ParentNotFoundError,
    PropertyNotFoundError,
    ReferenceNotFoundError,
    SelfContainmentError,
    SynonymAlreadyTakenError,
    SynonymNotFoundError,
    TitleTakenError,
    log_exception,
)
from .hierarchy import CatalogueHierarchyManager
from .models import Article, Catalogue, Entry
from .ordering import OrderedReferenceMap
from .requests import ArticleRequest, CatalogueRequest, EntryRequest

__all__ = [
    "OrderedReferenceMap",
    "Catalogue",
    "Article",
    "Entry",
    "CatalogueRequest",
    "ArticleRequest",
    "EntryRequest",
    "CatalogueHierarchyManager",
    "ArticleOrderingFacade",
    "EntryService",
    "LorebookError",
    "NotFoundError",
    "ConflictError",
    "InvariantViolationError",
    "ReferenceNotFoundError",
    "DuplicateReferenceError",
    "CatalogueNotFoundError",
    "ParentNotFoundError",
    "TitleTakenError",
    "CatalogueTitleTakenError",
    "AlreadyChildError",
    "NotAChildError",
    "SelfContainmentError",
    "CircularInheritanceError",
    "ArticleAlreadyInCatalogueError",
    "ArticleNotInCatalogueError",
    "ArticleNotFoundError",
    "ArticleTitleTakenError",
    "EntryNotFoundError",
    "EntryAlreadyInArticleError",
    "EntryNotInArticleError",
    "PropertyNotFoundError",
    "SynonymNotFoundError",
    "SynonymAlreadyTakenError",
    "PaginationError",
    "EntityNotInTrashError",
    "EntityCannotBeCastError",
    "log_exception",
]

__version__ = "1.0.0"
