"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from study_aids.domain.exceptions import InvalidRequestError
from study_aids.domain.value_objects import SchemaDescriptor

# ── Gateway request / result ────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """A single prompt-completion call, optionally constrained by a schema."""

    model: str
    prompt: str
    system_instruction: str | None = None
    response_schema: SchemaDescriptor | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.model, str) or not self.model.strip():
            raise InvalidRequestError("Model identifier must be a non-empty string.")
        if not isinstance(self.prompt, str) or not self.prompt.strip():
            raise InvalidRequestError("Prompt must be a non-empty string.")


@dataclass(frozen=True, slots=True)
class Structured:
    """Parsed JSON returned when a response schema was requested."""

    value: Any


@dataclass(frozen=True, slots=True)
class Text:
    """Raw provider text returned when no schema was requested."""

    text: str


GenerationResult = Union[Structured, Text]


# ── Study-aid parameters ────────────────────────────────────────────────────


class QuestionMode(str, Enum):
    """Which kinds of questions a quiz or test should contain."""

    MULTIPLE = "multiple"
    OPEN = "open"
    MIXED = "mixed"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ── Study aids ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Flashcard:
    question: str
    answer: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Flashcard:
        return cls(question=data["question"], answer=data["answer"])


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    """A quiz or test question.

    ``type`` is ``"multiple"``, ``"open"`` or ``"definition"``.  Multiple
    choice questions carry ``options`` and the 0-based ``correct`` index;
    the others carry a suggested ``answer``.
    """

    question: str
    type: str
    options: tuple[str, ...] = ()
    correct: int | None = None
    answer: str | None = None

    @property
    def is_multiple_choice(self) -> bool:
        return self.type == QuestionMode.MULTIPLE.value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuizQuestion:
        return cls(
            question=data["question"],
            type=data["type"],
            options=tuple(data.get("options") or ()),
            correct=data.get("correct"),
            answer=data.get("answer"),
        )


@dataclass(frozen=True, slots=True)
class RoutineSlot:
    """One block of a study schedule; times are ``HH:MM`` strings."""

    start: str
    end: str
    activity: str
    type: str  # "study", "break" or "commitment"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoutineSlot:
        return cls(
            start=data["start"],
            end=data["end"],
            activity=data["activity"],
            type=data["type"],
        )


@dataclass(frozen=True, slots=True)
class LessonSection:
    title: str
    content: str
    duration: int  # minutes

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LessonSection:
        return cls(
            title=data["title"], content=data["content"], duration=data["duration"]
        )


@dataclass(frozen=True, slots=True)
class LessonPlan:
    title: str
    objective: str
    materials: tuple[str, ...]
    sections: tuple[LessonSection, ...]
    assessment: str

    @property
    def total_duration(self) -> int:
        return sum(section.duration for section in self.sections)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LessonPlan:
        return cls(
            title=data["title"],
            objective=data["objective"],
            materials=tuple(data["materials"]),
            sections=tuple(LessonSection.from_dict(s) for s in data["sections"]),
            assessment=data["assessment"],
        )


@dataclass(frozen=True, slots=True)
class InterdisciplinaryConnection:
    subject: str
    connection: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InterdisciplinaryConnection:
        return cls(subject=data["subject"], connection=data["connection"])
