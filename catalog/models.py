"""
Shared data types for the lorebook domain engine.

Aggregates only reference each other by ID:

    Catalogue.children  -> OrderedReferenceMap of catalogue IDs
    Catalogue.articles  -> OrderedReferenceMap of article IDs
    Article.entries     -> OrderedReferenceMap of entry IDs
    Article.properties  -> property name -> entry ID
    Article.catalogues  -> set of catalogue IDs
    Entry.*_links       -> phrase -> article ID
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Set

from .ordering import OrderedReferenceMap


def _parse_date(value: Optional[str]) -> datetime:
    return datetime.fromisoformat(value) if value else datetime.now()


@dataclass
class Catalogue:
    """A node of the catalogue hierarchy."""
    id: str
    title: str
    creation_date: datetime = field(default_factory=datetime.now)
    parent_id: Optional[str] = None
    children: OrderedReferenceMap = field(default_factory=OrderedReferenceMap)
    articles: OrderedReferenceMap = field(default_factory=OrderedReferenceMap)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def copy(self) -> "Catalogue":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "creation_date": self.creation_date.isoformat(),
            "parent_id": self.parent_id,
            "children": self.children.to_dict(),
            "articles": self.articles.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Catalogue":
        return cls(
            id=data["id"],
            title=data["title"],
            creation_date=_parse_date(data.get("creation_date")),
            parent_id=data.get("parent_id"),
            children=OrderedReferenceMap.from_dict(data.get("children", {})),
            articles=OrderedReferenceMap.from_dict(data.get("articles", {})),
        )


@dataclass
class Article:
    """A page made of ordered entries."""
    id: str
    title: str
    creation_date: datetime = field(default_factory=datetime.now)
    entries: OrderedReferenceMap = field(default_factory=OrderedReferenceMap)
    properties: Dict[str, str] = field(default_factory=dict)
    catalogues: Set[str] = field(default_factory=set)

    def copy(self) -> "Article":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "creation_date": self.creation_date.isoformat(),
            "entries": self.entries.to_dict(),
            "properties": dict(self.properties),
            "catalogues": sorted(self.catalogues),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Article":
        return cls(
            id=data["id"],
            title=data["title"],
            creation_date=_parse_date(data.get("creation_date")),
            entries=OrderedReferenceMap.from_dict(data.get("entries", {})),
            properties=dict(data.get("properties", {})),
            catalogues=set(data.get("catalogues", [])),
        )


@dataclass
class Entry:
    """A paragraph of free text with its links to other articles."""
    id: str
    content: str
    creation_date: datetime = field(default_factory=datetime.now)
    article_id: Optional[str] = None
    explicit_links: Dict[str, str] = field(default_factory=dict)  # author-declared
    implicit_links: Dict[str, str] = field(default_factory=dict)  # found by the linker

    def copy(self) -> "Entry":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "content": self.content,
            "creation_date": self.creation_date.isoformat(),
            "article_id": self.article_id,
            "explicit_links": dict(self.explicit_links),
            "implicit_links": dict(self.implicit_links),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Entry":
        return cls(
            id=data["id"],
            content=data["content"],
            creation_date=_parse_date(data.get("creation_date")),
            article_id=data.get("article_id"),
            explicit_links=dict(data.get("explicit_links", {})),
            implicit_links=dict(data.get("implicit_links", {})),
        )
