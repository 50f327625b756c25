"""
Trash collector for deleted aggregates.

A deleted catalogue, article or entry can be parked here and restored
later under the same id. Restoring names the expected type so a caller
asking for an Article never receives an Entry.

Usage:
    from store.trash import MemoryTrashCollector

    trash = MemoryTrashCollector()
    trash.trash(manager.delete(catalogue_id))
    catalogue = trash.restore(catalogue_id, Catalogue)
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Dict, List, Type, TypeVar, Union

from catalog.errors import EntityCannotBeCastError, EntityNotInTrashError
from catalog.models import Article, Catalogue, Entry

from .json_file import _read_items, _write_items

logger = logging.getLogger(__name__)

Entity = Union[Catalogue, Article, Entry]
E = TypeVar("E", Catalogue, Article, Entry)

ENTITY_KINDS = {model.__name__: model for model in (Catalogue, Article, Entry)}


class MemoryTrashCollector:
    """Process-local trash, keyed by entity id."""

    def __init__(self):
        self._trashed: Dict[str, Entity] = {}

    def view(self) -> List[Entity]:
        return [copy.deepcopy(entity) for entity in self._trashed.values()]

    def trash(self, entity: Entity) -> str:
        """Store a deleted entity.

        Returns:
            The id of the trashed entity
        """
        staged = dict(self._trashed)
        staged[entity.id] = copy.deepcopy(entity)
        self._persist(staged)
        self._trashed = staged

        logger.info(f"Trashed {type(entity).__name__} {entity.id}")
        return entity.id

    def restore(self, entity_id: str, model: Type[E]) -> E:
        """Take an entity back out of the trash.

        Args:
            entity_id: Id of the trashed entity
            model: Expected type (Catalogue, Article or Entry)

        Returns:
            The restored entity

        Raises:
            EntityNotInTrashError: If nothing with that id is trashed
            EntityCannotBeCastError: If the trashed entity is of another type
        """
        entity = self._trashed.get(entity_id)
        if entity is None:
            raise EntityNotInTrashError(entity_id)
        if not isinstance(entity, model):
            raise EntityCannotBeCastError(entity_id, model.__name__)

        staged = dict(self._trashed)
        del staged[entity_id]
        self._persist(staged)
        self._trashed = staged

        logger.info(f"Restored {model.__name__} {entity_id}")
        return copy.deepcopy(entity)

    def clear(self) -> List[Entity]:
        """Empty the trash.

        Returns:
            The entities that were removed
        """
        cleared = self.view()
        self._persist({})
        self._trashed = {}
        return cleared

    def _persist(self, trashed: Dict[str, Entity]) -> None:
        """Hook for durable subclasses."""

    def __len__(self) -> int:
        return len(self._trashed)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._trashed


class JsonTrashCollector(MemoryTrashCollector):
    """Trash persisted to <store_dir>/<name>.json as {id: {"kind", "item"}}."""

    def __init__(self, store_dir: Path, name: str = "trash"):
        super().__init__()
        self.path = Path(store_dir) / f"{name}.json"
        self.path.parent.mkdir(parents=True, exist_ok=True)

        for entity_id, record in _read_items(self.path).items():
            self._trashed[entity_id] = ENTITY_KINDS[record["kind"]].from_dict(record["item"])

    def _persist(self, trashed: Dict[str, Entity]) -> None:
        _write_items(self.path, {
            entity_id: {"kind": type(entity).__name__, "item": entity.to_dict()}
            for entity_id, entity in trashed.items()
        })
