"""Parse markdown term tables into Term objects, grouped by section.

  ## Section name
  | Term | Definition | Example |
  |------|------------|---------|
  | **term** | definition | ... |

Bold markers around the term are optional; columns after the definition are
ignored.  Rows that appear before any ``## `` header land in "Unsorted".
"""
from __future__ import annotations

import re
import uuid
from pathlib import Path

from flashquiz.models import Term

UNSORTED = "Unsorted"

_HEADER_CELLS = {"term", "word", "термин"}


def _cells(line: str) -> list[str]:
    return [c.strip() for c in line.strip().strip("|").split("|")]


def parse_term_table(text: str) -> dict[str, list[Term]]:
    sections: dict[str, list[Term]] = {}
    current_section = UNSORTED

    for line in text.splitlines():
        m = re.match(r"^## (.+)", line)
        if m:
            current_section = m.group(1).strip()
            continue

        if not line.startswith("|"):
            continue

        cells = _cells(line)
        if len(cells) < 2:
            continue
        # Separator row: |------|:----:|
        if all(re.fullmatch(r":?-+:?", c) for c in cells if c):
            continue
        if cells[0].lower() in _HEADER_CELLS:
            continue

        term = re.sub(r"^\*\*(.+?)\*\*$", r"\1", cells[0]).strip()
        definition = cells[1]
        if not term or not definition:
            continue
        sections.setdefault(current_section, []).append(Term(
            id=str(uuid.uuid4()),
            term=term,
            definition=definition,
        ))

    return sections


def parse_term_file(path: Path) -> dict[str, list[Term]]:
    return parse_term_table(Path(path).read_text(encoding="utf-8"))
