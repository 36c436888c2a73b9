from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Term:
    id: str
    term: str
    definition: str
    image: str | None = None  # opaque reference, never inspected


@dataclass
class Topic:
    id: str
    name: str
    terms: list[Term] = field(default_factory=list)


@dataclass
class Folder:
    id: str
    name: str
    description: str = ""
    topics: list[Topic] = field(default_factory=list)


@dataclass
class Question:
    definition: str  # prompt shown to the user
    correct: str
    options: list[str]


@dataclass(frozen=True)
class Quiz:
    questions: tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self):
        return iter(self.questions)

    def __getitem__(self, index: int) -> Question:
        return self.questions[index]


@dataclass(frozen=True)
class InsufficientTerms:
    available: int
    required: int
