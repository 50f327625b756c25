"""
Article ordering facade and entry service.
"""

import pytest

from catalog import (
    ArticleAlreadyInCatalogueError,
    ArticleNotFoundError,
    ArticleNotInCatalogueError,
    ArticleRequest,
    ArticleTitleTakenError,
    CatalogueRequest,
    EntryAlreadyInArticleError,
    EntryNotFoundError,
    EntryNotInArticleError,
    EntryRequest,
    PropertyNotFoundError,
)


@pytest.fixture
def article(facade):
    article = facade.create(ArticleRequest(title="Vanessa Strongwill"))
    for entry_id in ("e1", "e2", "e3"):
        facade.append_entry(article.id, entry_id)
    return facade.get(article.id)


# ============================================================================
# TEST: ARTICLE LIFECYCLE
# ============================================================================

class TestArticleLifecycle:

    def test_create(self, facade):
        article = facade.create(ArticleRequest(title="Norcit", catalogues={"cat-1"}))

        assert article.id == "art-1"
        assert article.catalogues == {"cat-1"}
        assert len(article.entries) == 0

    def test_duplicate_title(self, facade):
        facade.create(ArticleRequest(title="Norcit"))
        with pytest.raises(ArticleTitleTakenError):
            facade.create(ArticleRequest(title="Norcit"))

    def test_change_title_to_own_title(self, facade, article):
        renamed = facade.change_title(article.id, "Vanessa Strongwill")
        assert renamed.title == "Vanessa Strongwill"

    def test_change_title_to_taken_title(self, facade, article):
        facade.create(ArticleRequest(title="Norcit"))
        with pytest.raises(ArticleTitleTakenError):
            facade.change_title(article.id, "Norcit")

    def test_delete(self, facade, article):
        facade.delete(article.id)

        assert facade.get(article.id) is None
        with pytest.raises(ArticleNotFoundError):
            facade.delete(article.id)


# ============================================================================
# TEST: ENTRY ORDERING
# ============================================================================

class TestEntryOrdering:

    def test_append_keeps_order(self, facade, article):
        assert facade.ordered_entries(article.id) == ["e1", "e2", "e3"]

    def test_append_duplicate(self, facade, article):
        with pytest.raises(EntryAlreadyInArticleError):
            facade.append_entry(article.id, "e2")

    def test_remove_compacts(self, facade, article):
        updated = facade.remove_entry(article.id, "e1")

        assert updated.entries.raw() == {"e2": 0, "e3": 1}

    def test_remove_absent(self, facade, article):
        with pytest.raises(EntryNotInArticleError):
            facade.remove_entry(article.id, "e9")

    def test_switch(self, facade, article):
        facade.switch_entries(article.id, "e1", "e3")
        assert facade.ordered_entries(article.id) == ["e3", "e2", "e1"]

    def test_switch_absent_names_missing_entry(self, facade, article):
        with pytest.raises(EntryNotInArticleError) as exc_info:
            facade.switch_entries(article.id, "e1", "e9")

        assert exc_info.value.entry_id == "e9"
        assert facade.ordered_entries(article.id) == ["e1", "e2", "e3"]

    def test_unknown_article(self, facade):
        with pytest.raises(ArticleNotFoundError):
            facade.append_entry("nope", "e1")


# ============================================================================
# TEST: PROPERTIES AND CATALOGUES
# ============================================================================

class TestProperties:

    def test_attach_overwrites(self, facade, article):
        facade.attach_property(article.id, "born", "e1")
        updated = facade.attach_property(article.id, "born", "e2")

        assert updated.properties == {"born": "e2"}

    def test_detach_returns_entry(self, facade, article):
        facade.attach_property(article.id, "born", "e1")
        updated, entry_id = facade.detach_property(article.id, "born")

        assert entry_id == "e1"
        assert updated.properties == {}

    def test_detach_missing(self, facade, article):
        with pytest.raises(PropertyNotFoundError):
            facade.detach_property(article.id, "born")


class TestCatalogueMembership:

    def test_add_and_remove(self, facade, article):
        assert facade.add_catalogue(article.id, "cat-1").catalogues == {"cat-1"}
        assert facade.remove_catalogue(article.id, "cat-1").catalogues == set()

    def test_add_twice(self, facade, article):
        facade.add_catalogue(article.id, "cat-1")
        with pytest.raises(ArticleAlreadyInCatalogueError):
            facade.add_catalogue(article.id, "cat-1")

    def test_remove_absent(self, facade, article):
        with pytest.raises(ArticleNotInCatalogueError):
            facade.remove_catalogue(article.id, "cat-1")


# ============================================================================
# TEST: ENTRIES
# ============================================================================

class TestEntryService:

    def test_create(self, entry_service):
        entry = entry_service.create(EntryRequest(
            content="Born in Grad Proper.",
            article_id="art-1",
            explicit_links={"Grad Proper": "art-2", "  ": "art-3"},
        ))

        assert entry.id == "ent-1"
        assert entry.explicit_links == {"Grad Proper": "art-2"}
        assert entry.implicit_links == {}

    def test_update_content(self, entry_service):
        entry = entry_service.create(EntryRequest(content="Draft"))
        entry_service.update_content(entry.id, "Final")

        assert entry_service.get(entry.id).content == "Final"

    def test_update_explicit_links_and_article(self, entry_service):
        entry = entry_service.create(EntryRequest(content="Draft"))
        entry_service.update_explicit_links(entry.id, {"Norcit": "art-1"})
        entry_service.change_article(entry.id, "art-2")

        stored = entry_service.get(entry.id)
        assert stored.explicit_links == {"Norcit": "art-1"}
        assert stored.article_id == "art-2"

    def test_delete(self, entry_service):
        entry = entry_service.create(EntryRequest(content="Draft"))
        entry_service.delete(entry.id)

        with pytest.raises(EntryNotFoundError):
            entry_service.get_or_raise(entry.id)


class TestMembershipAcrossServices:

    def test_both_halves_are_recorded_separately(self, manager, facade):
        catalogue = manager.create(CatalogueRequest(title="Cities"))
        article = facade.create(ArticleRequest(title="Norcit"))

        manager.append_article(catalogue.id, article.id)
        assert facade.get(article.id).catalogues == set()

        facade.add_catalogue(article.id, catalogue.id)
        assert manager.get(catalogue.id).articles.ordered() == [article.id]
        assert facade.get(article.id).catalogues == {catalogue.id}
