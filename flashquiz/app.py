"""FastAPI application with all routes."""
from __future__ import annotations

import logging
import os
import uuid
from dataclasses import asdict

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request

from flashquiz.config import Settings, load_settings, save_settings, validate_setting
from flashquiz.library import Library, LibraryError, NotFoundError
from flashquiz.models import Folder, Question, Term
from flashquiz.parsers.term_table_parser import parse_term_file, parse_term_table
from flashquiz.session import CardDeck, InsufficientTermsError, QuizSession, SessionError

app = FastAPI(title="Flashquiz")

# Global state (initialized in startup)
_library: Library | None = None
_settings: Settings | None = None
_quiz_sessions: dict[str, QuizSession] = {}
_card_sessions: dict[str, CardDeck] = {}

_log = logging.getLogger("flashquiz.app")


def get_library() -> Library:
    assert _library is not None
    return _library


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def _auto_import(library: Library, settings: Settings) -> None:
    """Load configured markdown term files: one folder per file, one topic per section."""
    log = logging.getLogger("flashquiz.import")
    for tf in settings.resolved_term_files():
        if not tf.exists():
            log.info("Skipping (not found): %s", tf)
            continue
        sections = parse_term_file(tf)
        folder = library.create_folder(tf.stem, f"Imported from {tf.name}")
        for section, terms in sections.items():
            topic = library.add_topic(folder.id, section)
            n = library.import_terms(folder.id, topic.id, terms)
            log.info("  %s / %s: %d terms", tf.name, section, n)


@app.on_event("startup")
async def startup():
    global _library, _settings
    if _library is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    logging.getLogger().setLevel(_settings.log_level.upper())
    _library = Library()
    if not os.environ.get("FLASHQUIZ_NO_AUTO_IMPORT"):
        _auto_import(_library, _settings)


# ── Helpers ───────────────────────────────────────────────────────────────

async def _body(request: Request) -> dict:
    try:
        body = await request.json() if await request.body() else {}
    except ValueError:
        # json.JSONDecodeError and UnicodeDecodeError
        raise HTTPException(400, "Invalid JSON")
    if not isinstance(body, dict):
        raise HTTPException(400, "Expected a JSON object")
    return body


def _field(body: dict, name: str) -> str:
    if name not in body:
        raise HTTPException(400, f"Missing field: {name}")
    value = body[name]
    if not isinstance(value, str):
        raise HTTPException(400, f"{name} must be a string")
    return value


def _optional_field(body: dict, name: str, default: str | None = None) -> str | None:
    value = body.get(name, default)
    if value is not None and not isinstance(value, str):
        raise HTTPException(400, f"{name} must be a string")
    return value


def _library_call(fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except LibraryError as e:
        raise HTTPException(400, str(e))


def _remember(sessions: dict, session) -> str:
    session_id = str(uuid.uuid4())
    sessions[session_id] = session
    limit = max(1, get_settings().max_sessions)
    while len(sessions) > limit:
        oldest = next(iter(sessions))
        _log.info("Evicting session %s", oldest)
        del sessions[oldest]
    return session_id


def _lookup(sessions: dict, session_id: str):
    if session_id not in sessions:
        raise HTTPException(404, "Session not found")
    return sessions[session_id]


def _folder_dict(folder: Folder) -> dict:
    return {
        "id": folder.id,
        "name": folder.name,
        "description": folder.description,
        "topic_count": len(folder.topics),
    }


def _question_dict(q: Question, reveal: bool = False) -> dict:
    data = {"definition": q.definition, "options": list(q.options)}
    if reveal:
        data["correct"] = q.correct
    return data


def _quiz_state(session_id: str, session: QuizSession) -> dict:
    state = {
        "session_id": session_id,
        "step": min(session.step + 1, session.total),
        "total": session.total,
        "score": session.score,
        "finished": session.finished,
    }
    q = session.current
    if q is not None:
        state["question"] = _question_dict(q, reveal=session.answered)
        state["selected"] = session.selected
    else:
        state["summary"] = session.summary()
    return state


def _card_state(session_id: str, deck: CardDeck) -> dict:
    card = deck.current
    position, total = deck.position
    return {
        "session_id": session_id,
        "position": position if card else 0,
        "total": total,
        "flipped": deck.flipped,
        "card": asdict(card) if card else None,
    }


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await _body(request)
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    updates = {k: v for k, v in body.items() if k in known}
    try:
        for k, v in updates.items():
            validate_setting(k, v)
    except ValueError as e:
        raise HTTPException(400, str(e))
    for k, v in updates.items():
        setattr(s, k, v)
    if "log_level" in updates:
        logging.getLogger().setLevel(s.log_level.upper())
    save_settings(s)
    return s.to_dict()


# ── API: Folders ──────────────────────────────────────────────────────────

@app.get("/api/folders")
async def api_list_folders():
    return [_folder_dict(f) for f in get_library().list_folders()]


@app.post("/api/folders", status_code=201)
async def api_create_folder(request: Request):
    body = await _body(request)
    folder = _library_call(
        get_library().create_folder, _field(body, "name"), _optional_field(body, "description", ""),
    )
    return _folder_dict(folder)


@app.put("/api/folders/{folder_id}")
async def api_rename_folder(folder_id: str, request: Request):
    body = await _body(request)
    folder = _library_call(get_library().rename_folder, folder_id, _field(body, "name"))
    return _folder_dict(folder)


@app.delete("/api/folders/{folder_id}")
async def api_delete_folder(folder_id: str):
    _library_call(get_library().delete_folder, folder_id)
    return {"ok": True}


# ── API: Topics ───────────────────────────────────────────────────────────

@app.get("/api/folders/{folder_id}/topics")
async def api_list_topics(folder_id: str):
    folder = _library_call(get_library().get_folder, folder_id)
    return [{"id": t.id, "name": t.name, "term_count": len(t.terms)} for t in folder.topics]


@app.post("/api/folders/{folder_id}/topics", status_code=201)
async def api_add_topic(folder_id: str, request: Request):
    body = await _body(request)
    topic = _library_call(get_library().add_topic, folder_id, _field(body, "name"))
    return {"id": topic.id, "name": topic.name, "term_count": 0}


# ── API: Terms ────────────────────────────────────────────────────────────

@app.get("/api/folders/{folder_id}/topics/{topic_id}/terms")
async def api_list_terms(folder_id: str, topic_id: str):
    terms = _library_call(get_library().get_terms, folder_id, topic_id)
    return [asdict(t) for t in terms]


@app.post("/api/folders/{folder_id}/topics/{topic_id}/terms", status_code=201)
async def api_add_term(folder_id: str, topic_id: str, request: Request):
    body = await _body(request)
    term = _library_call(
        get_library().add_term,
        folder_id,
        topic_id,
        _field(body, "term"),
        _field(body, "definition"),
        _optional_field(body, "image"),
    )
    return asdict(term)


@app.post("/api/folders/{folder_id}/topics/{topic_id}/terms/import")
async def api_import_terms(folder_id: str, topic_id: str, request: Request):
    body = await _body(request)
    sections = parse_term_table(_field(body, "markdown"))
    terms: list[Term] = [t for section in sections.values() for t in section]
    imported = _library_call(get_library().import_terms, folder_id, topic_id, terms)
    total = len(_library_call(get_library().get_terms, folder_id, topic_id))
    return {"imported": imported, "total": total}


# ── API: Quiz ─────────────────────────────────────────────────────────────

@app.post("/api/quiz/start")
async def api_quiz_start(request: Request):
    body = await _body(request)
    terms = _library_call(
        get_library().get_terms, _field(body, "folder_id"), _field(body, "topic_id"),
    )
    try:
        session = QuizSession(terms)
    except InsufficientTermsError as e:
        raise HTTPException(422, str(e))
    session_id = _remember(_quiz_sessions, session)
    _log.info("Quiz session %s started (%d questions)", session_id, session.total)
    return _quiz_state(session_id, session)


@app.get("/api/quiz/{session_id}")
async def api_quiz_state(session_id: str):
    return _quiz_state(session_id, _lookup(_quiz_sessions, session_id))


@app.post("/api/quiz/answer")
async def api_quiz_answer(request: Request):
    body = await _body(request)
    session_id = _field(body, "session_id")
    session = _lookup(_quiz_sessions, session_id)
    try:
        correct = session.select(_field(body, "option"))
    except SessionError as e:
        raise HTTPException(400, str(e))
    result = _quiz_state(session_id, session)
    result["correct"] = correct
    return result


@app.post("/api/quiz/next")
async def api_quiz_next(request: Request):
    body = await _body(request)
    session_id = _field(body, "session_id")
    session = _lookup(_quiz_sessions, session_id)
    try:
        session.next()
    except SessionError as e:
        raise HTTPException(400, str(e))
    return _quiz_state(session_id, session)


@app.post("/api/quiz/restart")
async def api_quiz_restart(request: Request):
    body = await _body(request)
    session_id = _field(body, "session_id")
    session = _lookup(_quiz_sessions, session_id)
    session.restart()
    return _quiz_state(session_id, session)


# ── API: Cards ────────────────────────────────────────────────────────────

@app.post("/api/cards/start")
async def api_cards_start(request: Request):
    body = await _body(request)
    terms = _library_call(
        get_library().get_terms, _field(body, "folder_id"), _field(body, "topic_id"),
    )
    deck = CardDeck(terms)
    session_id = _remember(_card_sessions, deck)
    return _card_state(session_id, deck)


@app.post("/api/cards/flip")
async def api_cards_flip(request: Request):
    body = await _body(request)
    session_id = _field(body, "session_id")
    deck = _lookup(_card_sessions, session_id)
    deck.flip()
    return _card_state(session_id, deck)


@app.post("/api/cards/next")
async def api_cards_next(request: Request):
    body = await _body(request)
    session_id = _field(body, "session_id")
    deck = _lookup(_card_sessions, session_id)
    deck.next()
    return _card_state(session_id, deck)
