"""
Entry Link Resolver Tests
=========================

Key invariants tested:
1. Explicit link phrases are never re-linked implicitly
2. Longer titles win over titles they contain
3. Synonyms only match what titles left unmatched
4. Linking the same entry twice gives the same links
"""

import pytest

from catalog import ArticleRequest, EntryRequest
from linking import EntryLinkResolver, find_implicit_links

ENTRY_CONTENT = (
    "The White Stag, Conciliator, Tiebreaker of the College of Conciliators, "
    "tutor of Vanessa Strongwill, last heir of the Strongwill family, born in Grad Proper, "
    "opposite Norcit. He was never the holder of the Key of Strength, unlike his brother - Primus. "
    "The College of Conciliators is home to conciliators. "
    "The Realms are the home of magical power."
)

ARTICLE_TITLES = [
    "Novem Harker",
    "Vanessa Strongwill",
    "Conciliator",
    "The College of Conciliators",
    "The Key of Strength",
    "Norcit",
    "Immortal Soul",
    "Immortal Souls",
    "Caspar Mistblooded",
    "The Realms",
    "The Second Sons",
    "The Harker Family",
    "The Strongwill Family",
    "Grad Proper",
    "Primus Suprima",
]

MENTIONED_TITLES = {
    "Novem Harker",
    "Vanessa Strongwill",
    "The Strongwill Family",
    "The Key of Strength",
    "Norcit",
    "Conciliator",
    "The College of Conciliators",
    "Grad Proper",
    "Primus Suprima",
}


@pytest.fixture
def world(facade, synonyms):
    """Articles and synonyms of the White Stag example, keyed by title."""
    by_title = {
        title: facade.create(ArticleRequest(title=title, catalogues={"cat-1"}))
        for title in ARTICLE_TITLES
    }

    synonyms.add("College", by_title["The College of Conciliators"].id)
    synonyms.add("Primus", by_title["Primus Suprima"].id)
    synonyms.add("Harker", by_title["Novem Harker"].id)
    synonyms.add("Novem", by_title["Novem Harker"].id)
    synonyms.add("The White Stag", by_title["Novem Harker"].id)
    return by_title


# ============================================================================
# TEST: PURE LINK FINDING
# ============================================================================

class TestFindImplicitLinks:

    def test_explicit_phrase_is_not_relinked(self):
        links = find_implicit_links(
            "Conciliator, tutor of Vanessa Strongwill",
            {"Vanessa Strongwill": "vs-id"},
            {"Conciliator": "con-id", "Vanessa Strongwill": "vs-id"},
            {},
        )

        assert links == {"Conciliator": "con-id"}

    def test_synonym_match(self):
        links = find_implicit_links("Harker returned at dawn", {}, {}, {"Harker": "nh-id"})
        assert links == {"Harker": "nh-id"}

    def test_longer_title_wins(self):
        links = find_implicit_links(
            "Tiebreaker of the College of Conciliators",
            {},
            {"Conciliators": "short-id", "The College of Conciliators": "coc-id"},
            {"College": "coc-id"},
        )

        assert links == {"The College of Conciliators": "coc-id"}

    def test_every_occurrence_is_blanked(self):
        links = find_implicit_links(
            "Norcit faces Norcit across the river",
            {},
            {"Norcit": "nor-id"},
            {"Norcit": "other-id"},
        )

        assert links == {"Norcit": "nor-id"}

    def test_case_and_punctuation_are_ignored(self):
        links = find_implicit_links("born in GRAD PROPER!", {}, {"Grad Proper": "gp-id"}, {})
        assert links == {"Grad Proper": "gp-id"}

    def test_partial_words_do_not_match(self):
        links = find_implicit_links("Norcitian traders", {}, {"Norcit": "nor-id"}, {})
        assert links == {}

    def test_no_candidates(self):
        links = find_implicit_links(
            "There are no articles that have any of these words as a link title.",
            {},
            {},
            {},
        )
        assert links == {}

    def test_stop_word_titles_are_ignored(self):
        assert find_implicit_links("The end of it", {}, {"The": "x"}, {}) == {}

    def test_custom_placeholder(self):
        links = find_implicit_links(
            "Key of Strength",
            {},
            {"The Key of Strength": "kos-id"},
            {"Strength": "str-id"},
            placeholder="@",
        )
        assert links == {"The Key of Strength": "kos-id"}

    def test_title_candidates_with_explicit_links(self):
        candidates = {
            "Novem Harker": "nh",
            "The Key of Strength": "kos",
            "Norcit": "nor",
            "Conciliator": "con",
            "The College of Conciliators": "coc",
            "Immortal Souls": "imsls",
            "Immortal Soul": "imsl",
            "Vanessa Strongwill": "vnstw",
            "Caspar Mistblooded": "cspmstb",
            "The Realms": "realms",
            "The Second Sons": "secson",
            "The Harker Family": "harfam",
            "The Strongwill Family": "stwfam",
            "Grad Proper": "grpr",
            "Primus Suprima": "prsp",
        }
        synonyms = {"Primus": "prsp", "College": "coc", "Harker": "nh", "Novem": "nh"}
        content = (
            "Novem Harker, The White Stag, Conciliator, Tiebreaker of the College of Conciliators, "
            "tutor of Vanessa Strongwill, last heir of the Strongwill family, born in Grad Proper, "
            "opposite Norcit. He was never the holder of the Key of Strength, unlike his brother - Primus. "
            "The College of Conciliators is home to conciliators."
        )

        links = find_implicit_links(content, {"The White Stag": "nh"}, candidates, synonyms)

        assert sorted(links.values()) == sorted(
            ["nh", "kos", "nor", "con", "coc", "vnstw", "stwfam", "grpr", "prsp"]
        )


# ============================================================================
# TEST: RESOLVER WITH REPOSITORIES
# ============================================================================

class TestEntryLinkResolver:

    def test_links_mentioned_articles(self, resolver, entry_service, world):
        entry = entry_service.create(EntryRequest(
            content=ENTRY_CONTENT,
            explicit_links={"The Realms": world["The Realms"].id},
        ))

        linked = resolver.link_entry_to_articles(entry)

        expected = {world[title].id for title in MENTIONED_TITLES}
        assert set(linked.implicit_links.values()) == expected
        assert linked.explicit_links == {"The Realms": world["The Realms"].id}

    def test_result_is_keyed_by_phrase(self, resolver, entry_service, world):
        entry = entry_service.create(EntryRequest(content="Harker met the Strongwill family."))

        linked = resolver.link_entry_to_articles(entry)

        assert linked.implicit_links == {
            "The Strongwill Family": world["The Strongwill Family"].id,
            "Harker": world["Novem Harker"].id,
        }

    def test_linked_entry_is_saved(self, resolver, entry_service, world):
        entry = entry_service.create(EntryRequest(content="Born in Grad Proper."))

        resolver.link_entry_to_articles(entry)

        assert entry_service.get(entry.id).implicit_links == {"Grad Proper": world["Grad Proper"].id}

    def test_link_does_not_mutate_input(self, resolver, entry_service, world):
        entry = entry_service.create(EntryRequest(content="Born in Grad Proper."))

        resolver.link(entry)

        assert entry.implicit_links == {}

    def test_linking_is_idempotent(self, resolver, entry_service, world):
        entry = entry_service.create(EntryRequest(content=ENTRY_CONTENT))

        first = resolver.link_entry_to_articles(entry)
        second = resolver.link_entry_to_articles(first)

        assert first.implicit_links == second.implicit_links

    def test_stale_links_are_replaced(self, resolver, entry_service, world):
        entry = entry_service.create(EntryRequest(content="Born in Grad Proper."))
        resolver.link_entry_to_articles(entry)

        updated = entry_service.update_content(entry.id, "Opposite Norcit.")
        linked = resolver.link_entry_to_articles(updated)

        assert linked.implicit_links == {"Norcit": world["Norcit"].id}

    def test_refresh_links_of_article_skips_missing_entries(self, resolver, facade, entry_service, world):
        article = world["Vanessa Strongwill"]
        first = entry_service.create(EntryRequest(content="Tutored by a Conciliator.", article_id=article.id))
        second = entry_service.create(EntryRequest(content="Heir of the Strongwill family.", article_id=article.id))
        facade.append_entry(article.id, first.id)
        facade.append_entry(article.id, "ent-missing")
        facade.append_entry(article.id, second.id)

        refreshed = resolver.refresh_links_of_article(facade.get(article.id))

        assert [entry.id for entry in refreshed] == [first.id, second.id]
        assert refreshed[0].implicit_links == {"Conciliator": world["Conciliator"].id}
        assert entry_service.get(second.id).implicit_links == {
            "The Strongwill Family": world["The Strongwill Family"].id,
        }

    def test_candidates_come_from_title_search(self, resolver, entry_service, world):
        entry = entry_service.create(EntryRequest(content="Immortal"))

        candidates = resolver.candidates_for(entry)

        assert set(candidates) == {"Immortal Soul", "Immortal Souls"}


class TestPlaceholder:

    @pytest.mark.parametrize("placeholder", ["x-y", "x y", ""])
    def test_split_placeholder_is_rejected(self, placeholder):
        with pytest.raises(ValueError):
            find_implicit_links("Norcit", {}, {"Norcit": "nor-id"}, {}, placeholder=placeholder)

    def test_resolver_rejects_split_placeholder(self, entries, articles, synonyms):
        with pytest.raises(ValueError):
            EntryLinkResolver(entries, articles, synonyms, placeholder="x-y")
