"""
Synonym table: alias phrase -> article id.

The table is global (not scoped per article) and is passed to the link
resolver explicitly. Anything with a get_all() returning the alias map can
stand in for MemorySynonymTable.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from catalog.errors import SynonymAlreadyTakenError, SynonymNotFoundError

logger = logging.getLogger(__name__)


class MemorySynonymTable:
    """Process-local synonym table."""

    def __init__(self, synonyms: Optional[Dict[str, str]] = None):
        self._synonyms: Dict[str, str] = dict(synonyms or {})

    def get_all(self) -> Dict[str, str]:
        return dict(self._synonyms)

    def add(self, synonym: str, article_id: str) -> str:
        """Register an alias for an article.

        Args:
            synonym: Alias phrase as it appears in text
            article_id: Article the alias resolves to

        Returns:
            The added synonym

        Raises:
            SynonymAlreadyTakenError: If the alias is already registered
        """
        if synonym in self._synonyms:
            raise SynonymAlreadyTakenError(synonym)

        staged = dict(self._synonyms)
        staged[synonym] = article_id
        self._persist(staged)
        self._synonyms = staged
        logger.info(f"Added synonym '{synonym}' -> {article_id}")
        return synonym

    def remove(self, synonym: str) -> Tuple[str, str]:
        """Remove an alias.

        Returns:
            The removed (synonym, article_id) pair

        Raises:
            SynonymNotFoundError: If the alias is not registered
        """
        if synonym not in self._synonyms:
            raise SynonymNotFoundError(synonym)

        staged = dict(self._synonyms)
        article_id = staged.pop(synonym)
        self._persist(staged)
        self._synonyms = staged
        logger.info(f"Removed synonym '{synonym}'")
        return synonym, article_id

    def _persist(self, synonyms: Dict[str, str]) -> None:
        """Hook for durable subclasses; called before a change becomes visible."""

    def __len__(self) -> int:
        return len(self._synonyms)
