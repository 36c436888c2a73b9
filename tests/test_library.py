"""Tests for the in-memory folder/topic/term library."""
from __future__ import annotations

import pytest

from flashquiz.library import LibraryError, NotFoundError
from flashquiz.models import Term


class TestFolders:
    def test_create_and_list(self, library):
        a = library.create_folder("Spanish", "Basic nouns")
        b = library.create_folder("German")
        assert [f.name for f in library.list_folders()] == ["Spanish", "German"]
        assert a.description == "Basic nouns"
        assert b.description == ""
        assert a.id != b.id

    @pytest.mark.parametrize("name", ["", "   ", "\n"])
    def test_blank_name_rejected(self, library, name):
        with pytest.raises(LibraryError):
            library.create_folder(name)
        assert library.list_folders() == []

    def test_rename(self, library):
        folder = library.create_folder("Spansih")
        library.rename_folder(folder.id, "Spanish")
        assert library.get_folder(folder.id).name == "Spanish"

    def test_rename_blank_rejected(self, library):
        folder = library.create_folder("Spanish")
        with pytest.raises(LibraryError):
            library.rename_folder(folder.id, " ")
        assert folder.name == "Spanish"

    def test_delete(self, populated_library):
        library, folder, _ = populated_library
        library.delete_folder(folder.id)
        assert library.list_folders() == []
        with pytest.raises(NotFoundError):
            library.get_folder(folder.id)

    def test_unknown_folder(self, library):
        with pytest.raises(NotFoundError):
            library.rename_folder("missing", "x")
        with pytest.raises(KeyError):
            library.delete_folder("missing")


class TestTopics:
    def test_add_topic(self, library):
        folder = library.create_folder("Spanish")
        topic = library.add_topic(folder.id, "Food")
        assert library.get_topic(folder.id, topic.id).name == "Food"
        assert folder.topics == [topic]

    def test_blank_topic_rejected(self, library):
        folder = library.create_folder("Spanish")
        with pytest.raises(LibraryError):
            library.add_topic(folder.id, "  ")
        assert folder.topics == []

    def test_topic_in_unknown_folder(self, library):
        with pytest.raises(NotFoundError):
            library.add_topic("missing", "Food")

    def test_unknown_topic(self, library):
        folder = library.create_folder("Spanish")
        with pytest.raises(NotFoundError):
            library.get_topic(folder.id, "missing")


class TestTerms:
    def test_add_term(self, populated_library):
        library, folder, topic = populated_library
        term = library.add_term(folder.id, topic.id, "leche", "milk")
        terms = library.get_terms(folder.id, topic.id)
        assert terms[-1] == term
        assert len(terms) == 6
        assert term.image is None

    def test_term_text_kept_verbatim(self, populated_library):
        library, folder, topic = populated_library
        term = library.add_term(folder.id, topic.id, " pan ", "bread ", image="img-1")
        assert term.term == " pan "
        assert term.definition == "bread "
        assert term.image == "img-1"

    @pytest.mark.parametrize("term,definition", [("", "milk"), ("leche", ""), (" ", " ")])
    def test_blank_term_rejected(self, populated_library, term, definition):
        library, folder, topic = populated_library
        with pytest.raises(LibraryError):
            library.add_term(folder.id, topic.id, term, definition)
        assert len(library.get_terms(folder.id, topic.id)) == 5

    def test_get_terms_returns_copy(self, populated_library):
        library, folder, topic = populated_library
        library.get_terms(folder.id, topic.id).clear()
        assert len(library.get_terms(folder.id, topic.id)) == 5

    def test_import_skips_blank_rows(self, library):
        folder = library.create_folder("Spanish")
        topic = library.add_topic(folder.id, "Food")
        n = library.import_terms(folder.id, topic.id, [
            Term("1", "pan", "bread"),
            Term("2", "", "nothing"),
            Term("3", "queso", "cheese"),
        ])
        assert n == 2
        assert [t.term for t in library.get_terms(folder.id, topic.id)] == ["pan", "queso"]
