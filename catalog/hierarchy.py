"""
Catalogue hierarchy manager for lorebook.

Maintains the parent/child tree of catalogues:
- parent_id on the child and the parent's ordered children map are always
  written together through one repository commit
- a catalogue cannot contain itself or adopt its own direct parent
- deleting a catalogue folds its children into its parent, keeping their order

Usage:
    from catalog import CatalogueHierarchyManager, CatalogueRequest

    manager = CatalogueHierarchyManager(catalogues)
    lore = manager.create(CatalogueRequest(title="Lore"))
    people = manager.create(CatalogueRequest(title="People", parent_id=lore.id))
    manager.delete(lore.id)  # People becomes a root
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from .errors import (
    ArticleAlreadyInCatalogueError,
    ArticleNotInCatalogueError,
    CatalogueNotFoundError,
    CatalogueTitleTakenError,
    NotAChildError,
    ParentNotFoundError,
    ReferenceNotFoundError,
)
from .ids import generate_unique_id, uuid_generator
from .invariants import check_can_adopt
from .models import Catalogue
from .requests import CatalogueRequest

logger = logging.getLogger(__name__)


class CatalogueHierarchyManager:
    """Creates, moves, reorders and deletes catalogues."""

    def __init__(
        self,
        catalogues,
        id_generator: Callable[[], str] = uuid_generator,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize hierarchy manager.

        Args:
            catalogues: Catalogue repository (find_by_id, find_by_title, commit)
            id_generator: Produces ids for new catalogues
            clock: Produces creation dates
        """
        self.catalogues = catalogues
        self.id_generator = id_generator
        self.clock = clock

    def create(self, request: CatalogueRequest) -> Catalogue:
        """Create a catalogue, optionally under an existing parent.

        Args:
            request: Title and optional parent id

        Returns:
            The created catalogue

        Raises:
            CatalogueTitleTakenError: If the title is used by another catalogue
            ParentNotFoundError: If parent_id does not resolve
        """
        if self.catalogues.find_by_title(request.title) is not None:
            raise CatalogueTitleTakenError(request.title)

        parent = None
        if request.parent_id is not None:
            parent = self.catalogues.find_by_id(request.parent_id)
            if parent is None:
                raise ParentNotFoundError(request.parent_id)

        catalogue = Catalogue(
            id=generate_unique_id(self.catalogues, self.id_generator),
            title=request.title,
            creation_date=self.clock(),
            parent_id=request.parent_id,
        )

        changed = [catalogue]
        if parent is not None:
            parent.children.append(catalogue.id)
            changed.append(parent)

        self.catalogues.commit(changed)
        logger.info(f"Created catalogue '{catalogue.title}' ({catalogue.id})")
        return catalogue

    def get(self, catalogue_id: str) -> Optional[Catalogue]:
        return self.catalogues.find_by_id(catalogue_id)

    def get_or_raise(self, catalogue_id: str) -> Catalogue:
        catalogue = self.catalogues.find_by_id(catalogue_id)
        if catalogue is None:
            raise CatalogueNotFoundError(catalogue_id)
        return catalogue

    def change_title(self, catalogue_id: str, new_title: str) -> Catalogue:
        catalogue = self.get_or_raise(catalogue_id)

        holder = self.catalogues.find_by_title(new_title)
        if holder is not None and holder.id != catalogue.id:
            raise CatalogueTitleTakenError(new_title)

        catalogue.title = new_title
        self.catalogues.commit([catalogue])
        return catalogue

    def change_parent(self, child_id: str, new_parent_id: str) -> Catalogue:
        """Move a catalogue under a new parent.

        Args:
            child_id: Catalogue to move
            new_parent_id: Catalogue that becomes its parent

        Returns:
            The updated child

        Raises:
            CatalogueNotFoundError: If either catalogue does not exist
            AlreadyChildError: If the child already hangs under new_parent_id
            SelfContainmentError: If child_id == new_parent_id
            CircularInheritanceError: If the new parent is a direct child of the child
        """
        child = self.get_or_raise(child_id)
        parent = self.get_or_raise(new_parent_id)

        self.catalogues.commit(self._adopt(child, parent))
        logger.info(f"Moved catalogue {child.id} under {parent.id}")
        return child

    def append_child(self, parent_id: str, child_id: str) -> Catalogue:
        """Append a catalogue to the end of a parent's children.

        Same guards as change_parent; returns the updated parent.
        """
        parent = self.get_or_raise(parent_id)
        child = self.get_or_raise(child_id)

        self.catalogues.commit(self._adopt(child, parent))
        logger.info(f"Appended catalogue {child.id} to {parent.id}")
        return parent

    def remove_child(self, parent_id: str, child_id: str) -> Catalogue:
        """Detach a child, turning it into a root catalogue.

        Returns:
            The updated parent

        Raises:
            NotAChildError: If child_id does not hang under parent_id
        """
        parent = self.get_or_raise(parent_id)
        child = self.get_or_raise(child_id)

        if child.parent_id != parent.id:
            raise NotAChildError(parent.id, child.id)

        if child.id in parent.children:
            parent.children.remove(child.id)
        child.parent_id = None

        self.catalogues.commit([parent, child])
        logger.info(f"Removed catalogue {child.id} from {parent.id}")
        return parent

    def orphan(self, catalogue_id: str) -> Catalogue:
        """Detach a catalogue from whatever parent it has."""
        catalogue = self.get_or_raise(catalogue_id)
        if catalogue.parent_id is None:
            return catalogue

        changed = self._detach(catalogue)
        catalogue.parent_id = None

        self.catalogues.commit([catalogue] + changed)
        return catalogue

    def switch_children(self, parent_id: str, first_id: str, second_id: str) -> Catalogue:
        """Swap the display order of two children.

        Raises:
            NotAChildError: Naming the child missing from the parent
        """
        parent = self.get_or_raise(parent_id)

        try:
            parent.children.swap(first_id, second_id)
        except ReferenceNotFoundError as exc:
            raise NotAChildError(parent.id, exc.reference) from exc

        self.catalogues.commit([parent])
        return parent

    def append_article(self, catalogue_id: str, article_id: str) -> Catalogue:
        """Append an article id to the catalogue's ordered articles.

        Only Catalogue.articles changes; the caller also records the
        catalogue on the article with ArticleOrderingFacade.add_catalogue.

        Raises:
            ArticleAlreadyInCatalogueError: If the article is already listed
        """
        catalogue = self.get_or_raise(catalogue_id)

        if article_id in catalogue.articles:
            raise ArticleAlreadyInCatalogueError(catalogue.id, article_id)

        catalogue.articles.append(article_id)
        self.catalogues.commit([catalogue])
        return catalogue

    def remove_article(self, catalogue_id: str, article_id: str) -> Catalogue:
        catalogue = self.get_or_raise(catalogue_id)

        if article_id not in catalogue.articles:
            raise ArticleNotInCatalogueError(catalogue.id, article_id)

        catalogue.articles.remove(article_id)
        self.catalogues.commit([catalogue])
        return catalogue

    def switch_articles(self, catalogue_id: str, first_id: str, second_id: str) -> Catalogue:
        catalogue = self.get_or_raise(catalogue_id)

        try:
            catalogue.articles.swap(first_id, second_id)
        except ReferenceNotFoundError as exc:
            raise ArticleNotInCatalogueError(catalogue.id, exc.reference) from exc

        self.catalogues.commit([catalogue])
        return catalogue

    def delete(self, catalogue_id: str) -> Catalogue:
        """Delete a catalogue and fold its children one level up.

        The children are re-appended to the deleted catalogue's parent in
        their previous order; if it was a root they become roots.

        Args:
            catalogue_id: Catalogue to delete

        Returns:
            The deleted catalogue

        Raises:
            CatalogueNotFoundError: If the catalogue does not exist
        """
        catalogue = self.get_or_raise(catalogue_id)

        grandparent = None
        if catalogue.parent_id is not None:
            grandparent = self.catalogues.find_by_id(catalogue.parent_id)
            if grandparent is None:
                logger.warning(f"Parent {catalogue.parent_id} of catalogue {catalogue.id} is missing")
            elif catalogue.id in grandparent.children:
                grandparent.children.remove(catalogue.id)

        changed: Dict[str, Catalogue] = {}
        for child_id in catalogue.children.ordered():
            child = self.catalogues.find_by_id(child_id)
            if child is None:
                logger.warning(f"Skipping missing child {child_id} of catalogue {catalogue.id}")
                continue

            if grandparent is None:
                child.parent_id = None
            else:
                child.parent_id = grandparent.id
                if child.id not in grandparent.children:
                    grandparent.children.append(child.id)
            changed[child.id] = child

        if grandparent is not None:
            changed[grandparent.id] = grandparent

        self.catalogues.commit(changed.values(), deleted=[catalogue.id])
        logger.info(f"Deleted catalogue '{catalogue.title}', folded {len(catalogue.children)} children")
        return catalogue

    def children_of(self, catalogue_id: str) -> List[Catalogue]:
        """Children of a catalogue in display order (missing ids skipped)."""
        catalogue = self.get_or_raise(catalogue_id)
        children = [self.catalogues.find_by_id(child_id) for child_id in catalogue.children.ordered()]
        return [child for child in children if child is not None]

    def get_related(self, catalogue_id: str) -> Dict:
        """Get the catalogues around a given catalogue.

        Returns:
            {
                "parent": Catalogue or None,
                "children": [Catalogue, ...],
                "siblings": [Catalogue, ...]
            }
        """
        catalogue = self.get_or_raise(catalogue_id)

        related = {
            "parent": None,
            "children": self.children_of(catalogue.id),
            "siblings": [],
        }

        if catalogue.parent_id is not None:
            parent = self.catalogues.find_by_id(catalogue.parent_id)
            if parent is not None:
                related["parent"] = parent
                related["siblings"] = [
                    sibling for sibling in self.children_of(parent.id) if sibling.id != catalogue.id
                ]

        return related

    def _adopt(self, child: Catalogue, parent: Catalogue) -> List[Catalogue]:
        """Point child at parent and update both children maps.

        Returns:
            Every catalogue that changed and must be committed together
        """
        check_can_adopt(child, parent)

        changed = self._detach(child)

        child.parent_id = parent.id
        if child.id not in parent.children:
            parent.children.append(child.id)

        return [child, parent] + changed

    def _detach(self, child: Catalogue) -> List[Catalogue]:
        """Remove child from its current parent's children map."""
        if child.parent_id is None:
            return []

        old_parent = self.catalogues.find_by_id(child.parent_id)
        if old_parent is None:
            logger.warning(f"Parent {child.parent_id} of catalogue {child.id} is missing")
            return []

        if child.id in old_parent.children:
            old_parent.children.remove(child.id)
        return [old_parent]
