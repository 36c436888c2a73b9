"""In-memory store for folders, topics and their terms.

Nothing here touches disk: the library lives as long as the process does.
"""
from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Iterable

from flashquiz.models import Folder, Term, Topic

_log = logging.getLogger("flashquiz.library")


class LibraryError(ValueError):
    pass


class NotFoundError(LibraryError, KeyError):
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "not found"


def _new_id() -> str:
    return str(uuid.uuid4())


def _require_text(value: str, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise LibraryError(f"{what} must not be empty")
    return value


class Library:
    def __init__(self):
        self._folders: dict[str, Folder] = {}
        self._lock = threading.Lock()

    # ── Folders ──────────────────────────────────────────────────────────

    def create_folder(self, name: str, description: str = "") -> Folder:
        _require_text(name, "Folder name")
        folder = Folder(id=_new_id(), name=name, description=description or "")
        with self._lock:
            self._folders[folder.id] = folder
        _log.info("Created folder %r", name)
        return folder

    def get_folder(self, folder_id: str) -> Folder:
        folder = self._folders.get(folder_id)
        if folder is None:
            raise NotFoundError(f"Folder not found: {folder_id}")
        return folder

    def list_folders(self) -> list[Folder]:
        with self._lock:
            return list(self._folders.values())

    def rename_folder(self, folder_id: str, name: str) -> Folder:
        _require_text(name, "Folder name")
        with self._lock:
            folder = self.get_folder(folder_id)
            folder.name = name
        return folder

    def delete_folder(self, folder_id: str) -> None:
        with self._lock:
            folder = self.get_folder(folder_id)
            del self._folders[folder_id]
        _log.info("Deleted folder %r (%d topics)", folder.name, len(folder.topics))

    # ── Topics ───────────────────────────────────────────────────────────

    def add_topic(self, folder_id: str, name: str) -> Topic:
        _require_text(name, "Topic name")
        topic = Topic(id=_new_id(), name=name)
        with self._lock:
            self.get_folder(folder_id).topics.append(topic)
        return topic

    def get_topic(self, folder_id: str, topic_id: str) -> Topic:
        folder = self.get_folder(folder_id)
        topic = next((t for t in folder.topics if t.id == topic_id), None)
        if topic is None:
            raise NotFoundError(f"Topic not found: {topic_id}")
        return topic

    # ── Terms ────────────────────────────────────────────────────────────

    def add_term(
        self,
        folder_id: str,
        topic_id: str,
        term: str,
        definition: str,
        image: str | None = None,
    ) -> Term:
        _require_text(term, "Term")
        _require_text(definition, "Definition")
        card = Term(id=_new_id(), term=term, definition=definition, image=image)
        with self._lock:
            self.get_topic(folder_id, topic_id).terms.append(card)
        return card

    def import_terms(self, folder_id: str, topic_id: str, terms: Iterable[Term]) -> int:
        """Append already-parsed terms, skipping rows with blank text."""
        added = [t for t in terms if t.term.strip() and t.definition.strip()]
        with self._lock:
            self.get_topic(folder_id, topic_id).terms.extend(added)
        return len(added)

    def get_terms(self, folder_id: str, topic_id: str) -> list[Term]:
        with self._lock:
            return list(self.get_topic(folder_id, topic_id).terms)
