"""Study-aid use cases — one gateway call per operation.

Each operation fills a prompt template, pairs it with the response schema
for the aid being generated, and maps the validated structured result onto
domain entities.  Gateway errors propagate to the caller, except for the
regulation Q&A which answers with a fixed fallback text instead.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, TypeVar

from study_aids.domain.entities import (
    Difficulty,
    Flashcard,
    GenerationRequest,
    InterdisciplinaryConnection,
    LessonPlan,
    QuestionMode,
    QuizQuestion,
    RoutineSlot,
    Structured,
    Text,
)
from study_aids.domain.exceptions import (
    GatewayError,
    InvalidRequestError,
    MalformedResponseError,
)
from study_aids.domain.value_objects import SchemaDescriptor
from study_aids.services import prompts
from study_aids.services.completion_gateway import CompletionGateway

logger = logging.getLogger(__name__)

_S = SchemaDescriptor

# ── Response schemas ────────────────────────────────────────────────────────

FLASHCARDS_SCHEMA = _S.array_of(
    _S.object_of(
        {
            "question": _S.string("The question for the front of the flashcard."),
            "answer": _S.string("The answer for the back of the flashcard."),
        },
        required=["question", "answer"],
    )
)


def _question_schema(type_hint: str, answer_hint: str) -> SchemaDescriptor:
    return _S.array_of(
        _S.object_of(
            {
                "question": _S.string(),
                "type": _S.string(type_hint),
                "options": _S.array_of(
                    _S.string(), "Array of 4 options for multiple choice questions."
                ),
                "correct": _S.integer(
                    "The 0-based index of the correct option for multiple choice questions."
                ),
                "answer": _S.string(answer_hint),
            },
            required=["question", "type"],
        )
    )


QUIZ_SCHEMA = _question_schema(
    "Can be 'multiple' or 'open'.",
    "A suggested correct answer for open-ended questions.",
)

TEST_SCHEMA = _question_schema(
    "Can be 'multiple', 'open', or 'definition'.",
    "A suggested correct answer for open-ended or definition questions.",
)

ROUTINE_SCHEMA = _S.array_of(
    _S.object_of(
        {
            "start": _S.string("Start time in HH:MM format."),
            "end": _S.string("End time in HH:MM format."),
            "activity": _S.string("Description of the activity."),
            "type": _S.string("Type of activity: 'study', 'break', or 'commitment'."),
        },
        required=["start", "end", "activity", "type"],
    )
)

LESSON_PLAN_SCHEMA = _S.object_of(
    {
        "title": _S.string(),
        "objective": _S.string(),
        "materials": _S.array_of(_S.string()),
        "sections": _S.array_of(
            _S.object_of(
                {
                    "title": _S.string(),
                    "content": _S.string(),
                    "duration": _S.integer(),
                },
                required=["title", "content", "duration"],
            )
        ),
        "assessment": _S.string(),
    },
    required=["title", "objective", "materials", "sections", "assessment"],
)

CONNECTIONS_SCHEMA = _S.array_of(
    _S.object_of(
        {"subject": _S.string(), "connection": _S.string()},
        required=["subject", "connection"],
    )
)

_E = TypeVar("_E", bound=Enum)


def _coerce(enum_type: type[_E], value: str | _E, name: str) -> _E:
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidRequestError(
            f"Invalid {name} '{value}'. Expected one of: {allowed}."
        ) from None


def _require_positive(value: int, name: str) -> None:
    if value <= 0:
        raise InvalidRequestError(f"{name} must be a positive integer, got {value}.")


# ── Use case ────────────────────────────────────────────────────────────────


class StudyAidService:
    """Generates study aids through a :class:`CompletionGateway`.

    Parameters
    ----------
    gateway:
        The completion gateway every operation goes through.
    model:
        Provider model identifier sent with each request.
    language:
        Natural language the generated content should be written in.
    regulation_text:
        Source text the regulation assistant is restricted to.  Defaults to
        :data:`prompts.DEFAULT_REGULATION_TEXT`.
    """

    def __init__(
        self,
        gateway: CompletionGateway,
        model: str,
        language: str = "Italian",
        regulation_text: str | None = None,
    ) -> None:
        self._gateway = gateway
        self._model = model
        self._language = language
        self._regulation_text = regulation_text or prompts.DEFAULT_REGULATION_TEXT

    async def generate_flashcards(self, topic: str, count: int = 5) -> list[Flashcard]:
        _require_positive(count, "count")
        prompt = prompts.FLASHCARDS_PROMPT.format(
            count=count, topic=topic, language=self._language
        )
        items = await self._structured(prompt, FLASHCARDS_SCHEMA)
        return [Flashcard.from_dict(item) for item in items]

    async def generate_quiz(
        self,
        topic: str,
        num_questions: int,
        mode: str | QuestionMode,
        difficulty: str | Difficulty,
    ) -> list[QuizQuestion]:
        return await self._questions(
            prompts.QUIZ_PROMPT, prompts.QUIZ_CONTENTS, QUIZ_SCHEMA,
            topic, num_questions, mode, difficulty,
        )

    async def generate_test_questions(
        self,
        topic: str,
        num_questions: int,
        mode: str | QuestionMode,
        difficulty: str | Difficulty,
    ) -> list[QuizQuestion]:
        """Like :meth:`generate_quiz`, but pitched at a whole class and may include definitions."""
        return await self._questions(
            prompts.TEST_PROMPT, prompts.TEST_CONTENTS, TEST_SCHEMA,
            topic, num_questions, mode, difficulty,
        )

    async def generate_routine(
        self, start_time: str, end_time: str, tasks: str, commitments: str = ""
    ) -> list[RoutineSlot]:
        prompt = prompts.ROUTINE_PROMPT.format(
            start_time=start_time,
            end_time=end_time,
            tasks=tasks,
            commitments=commitments.strip() or "None",
            language=self._language,
        )
        items = await self._structured(prompt, ROUTINE_SCHEMA)
        return [RoutineSlot.from_dict(item) for item in items]

    async def generate_lesson_plan(
        self, topic: str, duration_minutes: int, difficulty: str | Difficulty
    ) -> LessonPlan:
        _require_positive(duration_minutes, "duration_minutes")
        level = _coerce(Difficulty, difficulty, "difficulty")
        prompt = prompts.LESSON_PLAN_PROMPT.format(
            topic=topic,
            duration=duration_minutes,
            difficulty=prompts.LESSON_DIFFICULTY[level],
            language=self._language,
        )
        data = await self._structured(prompt, LESSON_PLAN_SCHEMA)
        return LessonPlan.from_dict(data)

    async def generate_interdisciplinary_connections(
        self, topic: str, subject: str
    ) -> list[InterdisciplinaryConnection]:
        prompt = prompts.CONNECTIONS_PROMPT.format(
            topic=topic, subject=subject, language=self._language
        )
        items = await self._structured(prompt, CONNECTIONS_SCHEMA)
        return [InterdisciplinaryConnection.from_dict(item) for item in items]

    async def answer_regulation_question(self, question: str) -> str:
        """Answer from the regulation text; never raises on gateway failure."""
        system_instruction = prompts.REGULATION_SYSTEM_INSTRUCTION.format(
            language=self._language, regulation=self._regulation_text
        )
        request = GenerationRequest(
            model=self._model,
            prompt=question,
            system_instruction=system_instruction,
        )
        try:
            result = await self._gateway.complete(request)
        except GatewayError as exc:
            logger.warning("Regulation question failed, using fallback: %s", exc)
            return prompts.REGULATION_FALLBACK_ANSWER

        answer = result.text.strip() if isinstance(result, Text) else ""
        return answer or prompts.REGULATION_FALLBACK_ANSWER

    # ── Helpers ─────────────────────────────────────────────────────────

    async def _questions(
        self,
        template: str,
        contents: dict[QuestionMode, str],
        schema: SchemaDescriptor,
        topic: str,
        num_questions: int,
        mode: str | QuestionMode,
        difficulty: str | Difficulty,
    ) -> list[QuizQuestion]:
        _require_positive(num_questions, "num_questions")
        question_mode = _coerce(QuestionMode, mode, "question mode")
        level = _coerce(Difficulty, difficulty, "difficulty")
        prompt = template.format(
            num_questions=num_questions,
            topic=topic,
            difficulty=prompts.QUESTION_DIFFICULTY[level],
            contents=contents[question_mode],
            language=self._language,
        )
        items = await self._structured(prompt, schema)
        return [QuizQuestion.from_dict(item) for item in items]

    async def _structured(self, prompt: str, schema: SchemaDescriptor) -> Any:
        request = GenerationRequest(model=self._model, prompt=prompt, response_schema=schema)
        result = await self._gateway.complete(request)
        if not isinstance(result, Structured):
            raise MalformedResponseError("Expected a structured response for a schema request.")
        return result.value
