"""
Text normalization for implicit link matching.

Entry content and article titles are reduced to the same dash-joined form
so that "word boundary" matching becomes plain substring containment:

    "Tutor of Vanessa Strongwill!"  ->  "-tutor-vanessa-strongwill-"
    "Vanessa Strongwill"            ->  "vanessa-strongwill"

Normalization is a matching aid only; the normalized text is never stored.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable

PUNCTUATION = (
    "!", "?", ".", ",", ":", ";",
    "[", "]", "<", ">", "(", ")", "{", "}",
    "'", "’", '"', "`", "-",
)

STOP_WORDS = frozenset({
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your", "yours",
    "yourself", "yourselves", "he", "him", "his", "himself", "she", "her", "hers",
    "herself", "it", "its", "itself", "they", "them", "their", "theirs", "themselves",
    "what", "which", "who", "whom", "this", "that", "these", "those", "am", "is", "are",
    "was", "were", "be", "been", "being", "have", "has", "had", "having", "do", "does",
    "did", "doing", "a", "an", "the", "and", "but", "if", "or", "because", "as", "until",
    "while", "of", "at", "by", "for", "with", "about", "against", "between", "into",
    "through", "during", "before", "after", "above", "below", "to", "from", "up", "down",
    "in", "out", "on", "off", "over", "under", "again", "further", "then", "once", "here",
    "there", "when", "where", "why", "how", "all", "any", "both", "each", "few", "more",
    "most", "other", "some", "such", "no", "nor", "not", "only", "own", "same", "so",
    "than", "too", "very", "s", "t", "can", "will", "just", "don", "should", "now",
})

_PUNCTUATION_PATTERN = re.compile("|".join(re.escape(mark) for mark in PUNCTUATION))


def remove_punctuation(text: str) -> str:
    return _PUNCTUATION_PATTERN.sub("", text)


def remove_stop_words(words: Iterable[str]) -> list:
    return [word for word in words if word not in STOP_WORDS]


def normalize_phrase(text: str) -> str:
    """Reduce a title, synonym or text to its dash-joined link form.

    Args:
        text: Free text

    Returns:
        Lower-cased significant words joined with single dashes, or ""
        when nothing but stop words and punctuation is left

    Example:
        >>> normalize_phrase("The College of Conciliators")
        'college-conciliators'
    """
    words = remove_punctuation(text).lower().split()
    return "-".join(remove_stop_words(words))


def normalize_content(text: str) -> str:
    """Normalize content and bound it with dashes on both sides.

    Example:
        >>> normalize_content("Born in Grad Proper, opposite Norcit.")
        '-born-grad-proper-opposite-norcit-'
    """
    return f"-{normalize_phrase(text)}-"


def strip_explicit_links(content: str, explicit_links: Dict[str, str]) -> str:
    """Remove every literal explicit link phrase from content.

    Longer phrases go first so a phrase contained in another one cannot
    leave a fragment of the longer phrase behind.
    """
    for phrase in sorted(explicit_links, key=len, reverse=True):
        if phrase:
            content = content.replace(phrase, " ")
    return content
