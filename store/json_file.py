"""
JSON file-backed repositories.

Same API as the in-memory repositories; after every commit the whole
collection is written to <store_dir>/<name>.json and it is read back when
the repository is opened.

File structure:
    <store_dir>/
        catalogues.json  - {"version", "updated_at", "items": {id: {...}}}
        articles.json
        entries.json
        synonyms.json    - {"version", "updated_at", "items": {alias: article_id}}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict

from catalog.models import Article, Catalogue, Entry
from linking.synonyms import MemorySynonymTable

from .memory import MemoryArticleRepository, MemoryCatalogueRepository, MemoryEntryRepository

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


def _write_items(path: Path, items: Dict) -> None:
    payload = {
        "version": FORMAT_VERSION,
        "updated_at": datetime.now().isoformat(),
        "items": items,
    }
    tmp_path = path.with_suffix(".json.tmp")
    tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp_path.replace(path)


def _read_items(path: Path) -> Dict:
    if not path.exists():
        return {}

    data = json.loads(path.read_text(encoding="utf-8"))
    return data.get("items", {})


class JsonFileMixin:
    """Persists a memory repository to a JSON file after each commit."""

    model = None

    def _open(self, store_dir: Path) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.store_dir / f"{self.name}.json"

        for item_id, item in _read_items(self.path).items():
            self._items[item_id] = self.model.from_dict(item)

        logger.debug(f"Loaded {len(self._items)} items from {self.path}")

    def _persist(self, items: Dict) -> None:
        _write_items(self.path, {item_id: item.to_dict() for item_id, item in items.items()})

    def clear(self) -> None:
        """Remove every item and the backing file."""
        self._items = {}
        if self.path.exists():
            self.path.unlink()


class JsonCatalogueRepository(JsonFileMixin, MemoryCatalogueRepository):
    model = Catalogue

    def __init__(self, store_dir: Path, name: str = "catalogues"):
        MemoryCatalogueRepository.__init__(self, name)
        self._open(store_dir)


class JsonArticleRepository(JsonFileMixin, MemoryArticleRepository):
    model = Article

    def __init__(self, store_dir: Path, name: str = "articles"):
        MemoryArticleRepository.__init__(self, name)
        self._open(store_dir)


class JsonEntryRepository(JsonFileMixin, MemoryEntryRepository):
    model = Entry

    def __init__(self, store_dir: Path, name: str = "entries"):
        MemoryEntryRepository.__init__(self, name)
        self._open(store_dir)


class JsonSynonymTable(MemorySynonymTable):
    def __init__(self, store_dir: Path, name: str = "synonyms"):
        self.path = Path(store_dir) / f"{name}.json"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(_read_items(self.path))

    def _persist(self, synonyms: Dict[str, str]) -> None:
        _write_items(self.path, synonyms)
