"""
Linking package for automatic cross-references between articles.

Components:
- normalizer: reduce content, titles and synonyms to a dash-joined form
- synonyms: global alias -> article id table
- resolver: find the articles an entry mentions
"""

from .normalizer import normalize_content, normalize_phrase, strip_explicit_links
from .resolver import EntryLinkResolver, find_implicit_links
from .synonyms import MemorySynonymTable

__all__ = [
    "EntryLinkResolver",
    "find_implicit_links",
    "MemorySynonymTable",
    "normalize_content",
    "normalize_phrase",
    "strip_explicit_links",
]
