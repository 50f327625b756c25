"""
Entry service: create, edit and delete entries.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from .errors import EntryNotFoundError
from .ids import generate_unique_id, uuid_generator
from .models import Entry
from .requests import EntryRequest

logger = logging.getLogger(__name__)


class EntryService:
    def __init__(
        self,
        entries,
        id_generator: Callable[[], str] = uuid_generator,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.entries = entries
        self.id_generator = id_generator
        self.clock = clock

    def create(self, request: EntryRequest) -> Entry:
        entry = Entry(
            id=generate_unique_id(self.entries, self.id_generator),
            content=request.content,
            creation_date=self.clock(),
            article_id=request.article_id,
            explicit_links=dict(request.explicit_links),
        )

        self.entries.save(entry)
        logger.debug(f"Created entry {entry.id}")
        return entry

    def get(self, entry_id: str) -> Optional[Entry]:
        return self.entries.find_by_id(entry_id)

    def get_or_raise(self, entry_id: str) -> Entry:
        entry = self.entries.find_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def update_content(self, entry_id: str, content: str) -> Entry:
        entry = self.get_or_raise(entry_id)
        entry.content = content
        return self.entries.save(entry)

    def update_explicit_links(self, entry_id: str, explicit_links: Dict[str, str]) -> Entry:
        entry = self.get_or_raise(entry_id)
        entry.explicit_links = dict(explicit_links)
        return self.entries.save(entry)

    def change_article(self, entry_id: str, article_id: str) -> Entry:
        entry = self.get_or_raise(entry_id)
        entry.article_id = article_id
        return self.entries.save(entry)

    def delete(self, entry_id: str) -> Entry:
        entry = self.get_or_raise(entry_id)
        self.entries.delete(entry.id)
        return entry
