"""Shared test fixtures."""
from __future__ import annotations

import pytest

from flashquiz.library import Library
from flashquiz.models import Term


@pytest.fixture
def sample_terms():
    """Four distinct vocabulary terms."""
    return [
        Term("1", "a", "1"),
        Term("2", "b", "2"),
        Term("3", "c", "3"),
        Term("4", "d", "4"),
    ]


@pytest.fixture
def spanish_terms():
    return [
        Term("es-1", "perro", "dog"),
        Term("es-2", "gato", "cat"),
        Term("es-3", "casa", "house"),
        Term("es-4", "libro", "book"),
        Term("es-5", "agua", "water", image="file:///tmp/water.png"),
    ]


@pytest.fixture
def library():
    return Library()


@pytest.fixture
def populated_library(library, spanish_terms):
    """A library with one folder, one topic and five terms."""
    folder = library.create_folder("Spanish", "Basic nouns")
    topic = library.add_topic(folder.id, "Animals & things")
    library.import_terms(folder.id, topic.id, spanish_terms)
    return library, folder, topic


@pytest.fixture
def terms_md_content():
    """Minimal markdown term table for parser testing."""
    return """\
# Spanish

Loose row before any section:

| **hola** | hello |

---

## Animals

| Term | Definition | Example |
|------|------------|---------|
| **perro** | dog | *El perro ladra.* |
| **gato** | cat | *El gato duerme.* |

## Home

| Term | Definition |
|:-----|:----------:|
| casa | house |
| libro | book |
| agua | water |
| | orphan definition |
"""
