"""
Entry link resolver.

Finds the articles an entry mentions without the author marking them:

1. Explicit link phrases are cut out of the content first
2. Content is normalized (lower-case, no punctuation, no stop words,
   dash-joined and dash-bounded)
3. Article titles found by a title search are normalized the same way and
   looked for as "-title-"; a hit is recorded and blanked with a
   placeholder so it cannot be matched again
4. Step 3 is repeated with the synonym table on what is left

Usage:
    from linking import EntryLinkResolver

    resolver = EntryLinkResolver(entries, articles, synonyms)
    linked = resolver.link_entry_to_articles(entry)
    linked.implicit_links  # {"Conciliator": "article-id", ...}
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from catalog.models import Article, Entry
from config.settings import LINK_PLACEHOLDER, check_placeholder

from .normalizer import normalize_content, normalize_phrase, strip_explicit_links

logger = logging.getLogger(__name__)


def _scan(text: str, phrases: Dict[str, str], found: Dict[str, str], placeholder: str) -> str:
    """Record every phrase present in normalized text and blank it out.

    Args:
        text: Dash-bounded normalized content
        phrases: Phrase as written -> target article id
        found: Result map, updated in place
        placeholder: Token that replaces a matched span

    Returns:
        The text with every matched span replaced
    """
    candidates: List[Tuple[str, str, str]] = []
    for phrase, target in phrases.items():
        normalized = normalize_phrase(phrase)
        if normalized and normalized != placeholder:
            candidates.append((normalized, phrase, target))

    # Longest first so a short title cannot split a longer one
    candidates.sort(key=lambda c: (-c[0].count("-"), -len(c[0]), c[0], c[1]))

    blank = f"-{placeholder}-"
    for normalized, phrase, target in candidates:
        token = f"-{normalized}-"
        if token not in text:
            continue

        while token in text:
            text = text.replace(token, blank)
        found[phrase] = target

    return text


def find_implicit_links(
    content: str,
    explicit_links: Dict[str, str],
    candidates: Dict[str, str],
    synonyms: Dict[str, str],
    placeholder: str = LINK_PLACEHOLDER,
) -> Dict[str, str]:
    """Compute the implicit links of a piece of content.

    Args:
        content: Raw entry content
        explicit_links: Author-declared phrase -> article id (never re-linked)
        candidates: Article title -> article id
        synonyms: Alias phrase -> article id
        placeholder: Token that blanks matched spans

    Returns:
        Matched phrase -> article id

    Raises:
        ValueError: If placeholder contains dashes or whitespace

    Example:
        >>> find_implicit_links(
        ...     "Conciliator, tutor of Vanessa Strongwill",
        ...     {"Vanessa Strongwill": "vs-id"},
        ...     {"Conciliator": "con-id", "Vanessa Strongwill": "vs-id"},
        ...     {},
        ... )
        {'Conciliator': 'con-id'}
    """
    check_placeholder(placeholder)
    found: Dict[str, str] = {}
    text = normalize_content(strip_explicit_links(content, explicit_links))

    text = _scan(text, candidates, found, placeholder)
    _scan(text, synonyms, found, placeholder)

    return found


class EntryLinkResolver:
    """Links entries to the articles their content mentions."""

    def __init__(self, entries, articles, synonyms, placeholder: str = LINK_PLACEHOLDER):
        """Initialize resolver.

        Args:
            entries: Entry repository (find_by_id, save)
            articles: Article lookup (search_by_title)
            synonyms: Synonym table (get_all)
            placeholder: Token used to blank matched spans
        """
        self.entries = entries
        self.articles = articles
        self.synonyms = synonyms
        self.placeholder = check_placeholder(placeholder)

    def candidates_for(self, entry: Entry) -> Dict[str, str]:
        """Article titles that may appear in the entry, mapped to their ids."""
        searchable = strip_explicit_links(entry.content, entry.explicit_links)
        return {article.title: article.id for article in self.articles.search_by_title(searchable)}

    def link(self, entry: Entry) -> Entry:
        """Return a copy of the entry with freshly computed implicit links."""
        linked = entry.copy()
        linked.implicit_links = find_implicit_links(
            entry.content,
            entry.explicit_links,
            self.candidates_for(entry),
            self.synonyms.get_all(),
            self.placeholder,
        )
        return linked

    def link_entry_to_articles(self, entry: Entry) -> Entry:
        """Link an entry and persist the result.

        Args:
            entry: Entry to link

        Returns:
            The saved entry with its implicit links replaced
        """
        linked = self.link(entry)
        self.entries.save(linked)

        logger.debug(f"Linked entry {entry.id} to {len(linked.implicit_links)} articles")
        return linked

    def refresh_links_of_article(self, article: Article) -> List[Entry]:
        """Re-link every entry of an article, in display order.

        Entry ids that no longer resolve are skipped.

        Returns:
            The updated entries
        """
        refreshed = []
        for entry_id in article.entries.ordered():
            entry = self.entries.find_by_id(entry_id)
            if entry is None:
                logger.warning(f"Skipping missing entry {entry_id} of article {article.id}")
                continue
            refreshed.append(self.link_entry_to_articles(entry))

        logger.info(f"Refreshed links of {len(refreshed)} entries in article {article.id}")
        return refreshed
