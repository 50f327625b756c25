"""
Persistence collaborators for the lorebook domain engine.

Components:
- memory: dictionary-backed repositories (default)
- json_file: the same repositories persisted to JSON files
- trash: deleted aggregates kept for restoring

Usage:
    from store import open_repositories

    repos = open_repositories()                  # in-memory
    repos = open_repositories("output/lorebook") # JSON files
    repos.catalogues, repos.articles, repos.entries, repos.synonyms, repos.trash
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple, Optional, Union

from config.settings import STORE_DIR
from linking.synonyms import MemorySynonymTable

from .json_file import (
    JsonArticleRepository,
    JsonCatalogueRepository,
    JsonEntryRepository,
    JsonSynonymTable,
)
from .memory import (
    MemoryArticleRepository,
    MemoryCatalogueRepository,
    MemoryEntryRepository,
    MemoryRepository,
    SortBy,
)
from .trash import JsonTrashCollector, MemoryTrashCollector

logger = logging.getLogger(__name__)


class Repositories(NamedTuple):
    catalogues: MemoryCatalogueRepository
    articles: MemoryArticleRepository
    entries: MemoryEntryRepository
    synonyms: MemorySynonymTable
    trash: MemoryTrashCollector


def open_repositories(store_dir: Optional[Union[str, Path]] = STORE_DIR) -> Repositories:
    """Open the repositories for a backend.

    Args:
        store_dir: Directory for JSON files (default: LOREBOOK_STORE_DIR);
            None selects the in-memory store

    Returns:
        Repositories tuple
    """
    if store_dir is None:
        logger.debug("Using in-memory store")
        return Repositories(
            MemoryCatalogueRepository(),
            MemoryArticleRepository(),
            MemoryEntryRepository(),
            MemorySynonymTable(),
            MemoryTrashCollector(),
        )

    store_dir = Path(store_dir)
    logger.info(f"Using JSON file store at {store_dir}")
    return Repositories(
        JsonCatalogueRepository(store_dir),
        JsonArticleRepository(store_dir),
        JsonEntryRepository(store_dir),
        JsonSynonymTable(store_dir),
        JsonTrashCollector(store_dir),
    )


__all__ = [
    "MemoryRepository",
    "MemoryCatalogueRepository",
    "MemoryArticleRepository",
    "MemoryEntryRepository",
    "JsonCatalogueRepository",
    "JsonArticleRepository",
    "JsonEntryRepository",
    "JsonSynonymTable",
    "MemoryTrashCollector",
    "JsonTrashCollector",
    "SortBy",
    "Repositories",
    "open_repositories",
]
