"""
Pytest configuration for lorebook tests.
"""

import itertools
from datetime import datetime

import pytest

from catalog import ArticleOrderingFacade, CatalogueHierarchyManager, EntryService
from linking import EntryLinkResolver, MemorySynonymTable
from store import MemoryArticleRepository, MemoryCatalogueRepository, MemoryEntryRepository

FIXED_DATE = datetime(2024, 3, 1, 12, 0, 0)


def sequential_ids(prefix: str):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


# ============================================================================
# REPOSITORIES
# ============================================================================

@pytest.fixture
def catalogues():
    return MemoryCatalogueRepository()


@pytest.fixture
def articles():
    return MemoryArticleRepository()


@pytest.fixture
def entries():
    return MemoryEntryRepository()


@pytest.fixture
def synonyms():
    return MemorySynonymTable()


# ============================================================================
# SERVICES
# ============================================================================

@pytest.fixture
def manager(catalogues):
    return CatalogueHierarchyManager(catalogues, sequential_ids("cat"), lambda: FIXED_DATE)


@pytest.fixture
def facade(articles):
    return ArticleOrderingFacade(articles, sequential_ids("art"), lambda: FIXED_DATE)


@pytest.fixture
def entry_service(entries):
    return EntryService(entries, sequential_ids("ent"), lambda: FIXED_DATE)


@pytest.fixture
def resolver(entries, articles, synonyms):
    return EntryLinkResolver(entries, articles, synonyms)
