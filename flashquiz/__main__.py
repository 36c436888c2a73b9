"""CLI entry point for flashquiz.

Usage:
  python -m flashquiz serve [--host HOST] [--port PORT] [--no-auto-import]
  python -m flashquiz quiz FILE [--section NAME]
"""
from __future__ import annotations

import os
import sys
from pathlib import Path


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "quiz":
        _quiz(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, quiz")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str | None) -> str | None:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _serve(args: list[str]):
    import uvicorn

    from flashquiz.config import load_settings

    if "--no-auto-import" in args:
        os.environ["FLASHQUIZ_NO_AUTO_IMPORT"] = "1"

    settings = load_settings()
    port = int(_parse_flag(args, "--port", str(settings.port)))
    host = _parse_flag(args, "--host", settings.host)

    print(f"Starting Flashquiz on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    try:
        uvicorn.run(
            "flashquiz.app:app",
            host=host,
            port=port,
            reload=False,
            log_level=settings.log_level.lower(),
        )
    finally:
        os.environ.pop("FLASHQUIZ_NO_AUTO_IMPORT", None)


def _quiz(args: list[str]):
    from flashquiz.parsers.term_table_parser import parse_term_file
    from flashquiz.session import InsufficientTermsError, QuizSession

    if not args or args[0].startswith("--"):
        print("Usage: python -m flashquiz quiz FILE [--section NAME]")
        sys.exit(1)
    path = Path(args[0])
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    sections = parse_term_file(path)
    section = _parse_flag(args, "--section", None)
    if section is not None:
        if section not in sections:
            print(f"No section named {section!r}. Sections: {', '.join(sections) or '(none)'}")
            sys.exit(1)
        terms = sections[section]
    else:
        terms = [t for group in sections.values() for t in group]

    try:
        session = QuizSession(terms)
    except InsufficientTermsError as e:
        print(e)
        sys.exit(1)

    while True:
        _play(session)
        s = session.summary()
        print(f"\nQuiz complete! Your score: {s['score']} of {s['total']} ({s['accuracy']}%)")
        again = input("Try again? [y/N] ").strip().lower()
        if again != "y":
            break
        session.restart()


def _play(session) -> None:
    while not session.finished:
        q = session.current
        print(f"\nQuestion {session.step + 1} of {session.total}")
        print(f"  {q.definition}\n")
        letters = [chr(65 + i) for i in range(len(q.options))]
        for letter, option in zip(letters, q.options):
            print(f"  {letter}) {option}")
        choice = ""
        while choice not in letters:
            choice = input("Your answer: ").strip().upper()
        option = q.options[letters.index(choice)]
        if session.select(option):
            print("Correct!")
        else:
            print(f"Wrong. The answer is: {q.correct}")
        print(f"Score: {session.score}")
        session.next()


if __name__ == "__main__":
    main()
