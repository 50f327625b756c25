"""
Error taxonomy for the lorebook domain engine.

Every error raised by the catalog, article, entry and linking components
derives from LorebookError and belongs to exactly one kind:

- NotFoundError: a referenced aggregate or reference is absent (404)
- ConflictError: the request collides with existing state (400)
- InvariantViolationError: the request would break the hierarchy (400)

Callers translate errors into response codes with log_exception().
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

NOT_FOUND = 404
BAD_REQUEST = 400


class LorebookError(RuntimeError):
    """Base exception for all domain errors."""

    status_code = BAD_REQUEST

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize domain error.

        Args:
            message: Human readable description
            details: IDs and values identifying the offending state
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(LorebookError):
    status_code = NOT_FOUND


class ConflictError(LorebookError):
    status_code = BAD_REQUEST


class InvariantViolationError(LorebookError):
    status_code = BAD_REQUEST


# ============================================================================
# Ordered reference map
# ============================================================================


class ReferenceNotFoundError(NotFoundError):
    def __init__(self, reference: str):
        super().__init__(f"Reference '{reference}' is not in the map", {"reference": reference})
        self.reference = reference


class DuplicateReferenceError(ConflictError):
    def __init__(self, reference: str):
        super().__init__(f"Reference '{reference}' is already in the map", {"reference": reference})
        self.reference = reference


# ============================================================================
# Catalogues
# ============================================================================


class CatalogueNotFoundError(NotFoundError):
    def __init__(self, catalogue_id: str):
        super().__init__(f"Could not find catalogue with id {catalogue_id}", {"catalogue_id": catalogue_id})
        self.catalogue_id = catalogue_id


class ParentNotFoundError(CatalogueNotFoundError):
    """Raised when a catalogue is created under a parent that does not exist."""


class TitleTakenError(ConflictError):
    def __init__(self, title: str, kind: str = "entity"):
        super().__init__(f"There is already a {kind} with the title '{title}'", {"title": title})
        self.title = title


class CatalogueTitleTakenError(TitleTakenError):
    def __init__(self, title: str):
        super().__init__(title, kind="catalogue")


class AlreadyChildError(ConflictError):
    def __init__(self, parent_id: str, child_id: str):
        super().__init__(
            f"The catalogue with id {parent_id} is already a parent of catalogue {child_id}",
            {"parent_id": parent_id, "child_id": child_id},
        )
        self.parent_id = parent_id
        self.child_id = child_id


class NotAChildError(ConflictError):
    def __init__(self, parent_id: str, child_id: str):
        super().__init__(
            f"The catalogue with id {child_id} is not a child of the catalogue with id {parent_id}",
            {"parent_id": parent_id, "child_id": child_id},
        )
        self.parent_id = parent_id
        self.child_id = child_id


class SelfContainmentError(InvariantViolationError):
    def __init__(self, catalogue_id: str):
        super().__init__(f"Catalogue with id {catalogue_id} cannot contain itself", {"catalogue_id": catalogue_id})
        self.catalogue_id = catalogue_id


class CircularInheritanceError(InvariantViolationError):
    def __init__(self, parent_id: str, child_id: str):
        super().__init__(
            f"Catalogue {parent_id} is a child of {child_id} and cannot become its parent",
            {"parent_id": parent_id, "child_id": child_id},
        )
        self.parent_id = parent_id
        self.child_id = child_id


class ArticleAlreadyInCatalogueError(ConflictError):
    def __init__(self, catalogue_id: str, article_id: str):
        super().__init__(
            f"The article with id {article_id} is already in the catalogue with id {catalogue_id}",
            {"catalogue_id": catalogue_id, "article_id": article_id},
        )
        self.catalogue_id = catalogue_id
        self.article_id = article_id


class ArticleNotInCatalogueError(ConflictError):
    def __init__(self, catalogue_id: str, article_id: str):
        super().__init__(
            f"The article with id {article_id} is not in the catalogue with id {catalogue_id}",
            {"catalogue_id": catalogue_id, "article_id": article_id},
        )
        self.catalogue_id = catalogue_id
        self.article_id = article_id


# ============================================================================
# Articles and entries
# ============================================================================


class ArticleNotFoundError(NotFoundError):
    def __init__(self, article_id: str):
        super().__init__(f"There is no article with id {article_id}", {"article_id": article_id})
        self.article_id = article_id


class ArticleTitleTakenError(TitleTakenError):
    def __init__(self, title: str):
        super().__init__(title, kind="article")


class EntryNotFoundError(NotFoundError):
    def __init__(self, entry_id: str):
        super().__init__(f"There is no entry with id {entry_id}", {"entry_id": entry_id})
        self.entry_id = entry_id


class EntryAlreadyInArticleError(ConflictError):
    def __init__(self, article_id: str, entry_id: str):
        super().__init__(
            f"The article with id {article_id} already contains the entry with id {entry_id}",
            {"article_id": article_id, "entry_id": entry_id},
        )
        self.article_id = article_id
        self.entry_id = entry_id


class EntryNotInArticleError(ConflictError):
    def __init__(self, article_id: str, entry_id: str):
        super().__init__(
            f"The article with id {article_id} does not contain an entry with id {entry_id}",
            {"article_id": article_id, "entry_id": entry_id},
        )
        self.article_id = article_id
        self.entry_id = entry_id


class PropertyNotFoundError(NotFoundError):
    def __init__(self, article_id: str, property_name: str):
        super().__init__(
            f"Could not find property named '{property_name}' on article {article_id}",
            {"article_id": article_id, "property": property_name},
        )
        self.article_id = article_id
        self.property_name = property_name


# ============================================================================
# Synonyms
# ============================================================================


class SynonymNotFoundError(NotFoundError):
    def __init__(self, synonym: str):
        super().__init__(f"The synonym '{synonym}' was not found in the map", {"synonym": synonym})
        self.synonym = synonym


class SynonymAlreadyTakenError(ConflictError):
    def __init__(self, synonym: str):
        super().__init__(f"The synonym '{synonym}' is already present in the synonym map", {"synonym": synonym})
        self.synonym = synonym


# ============================================================================
# Repositories
# ============================================================================


class PaginationError(ConflictError):
    def __init__(self, page: int, page_size: int):
        super().__init__(
            f"Cannot paginate with page {page} and page size {page_size}",
            {"page": page, "page_size": page_size},
        )
        self.page = page
        self.page_size = page_size


class EntityNotInTrashError(NotFoundError):
    def __init__(self, entity_id: str):
        super().__init__(f"There is no trashed entity with id {entity_id}", {"entity_id": entity_id})
        self.entity_id = entity_id


class EntityCannotBeCastError(ConflictError):
    def __init__(self, entity_id: str, kind: str):
        super().__init__(
            f"The trashed entity with id {entity_id} is not a {kind}",
            {"entity_id": entity_id, "kind": kind},
        )
        self.entity_id = entity_id
        self.kind = kind


def log_exception(exc: BaseException) -> int:
    """Log a domain error and return the response code it maps to.

    Args:
        exc: Exception raised by a domain operation

    Returns:
        Status code for the caller's response (404 or 400)

    Raises:
        The given exception if it is not a LorebookError

    Example:
        >>> log_exception(CatalogueNotFoundError("c-1"))
        404
    """
    if not isinstance(exc, LorebookError):
        logger.error(f"There is no case for an exception of type {type(exc).__name__}")
        raise exc

    logger.error(f"{type(exc).__name__}: {exc.message}")
    return exc.status_code
