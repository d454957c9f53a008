"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from study_aids.domain.entities import Difficulty, QuestionMode


class _TopicRequest(BaseModel):
    topic: str

    @field_validator("topic")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "topic must not be empty."
            raise ValueError(msg)
        return stripped


class FlashcardsRequest(_TopicRequest):
    """Request body for ``POST /api/v1/flashcards``."""

    count: int = Field(default=5, ge=1, le=50)


class QuestionsRequest(_TopicRequest):
    """Request body for ``POST /api/v1/quiz`` and ``POST /api/v1/test``."""

    num_questions: int = Field(ge=1, le=50)
    mode: QuestionMode = QuestionMode.MIXED
    difficulty: Difficulty = Difficulty.MEDIUM


class RoutineRequest(BaseModel):
    """Request body for ``POST /api/v1/routine``."""

    start_time: str
    end_time: str
    tasks: str = Field(min_length=1)
    commitments: str = ""


class LessonPlanRequest(_TopicRequest):
    """Request body for ``POST /api/v1/lesson-plan``."""

    duration_minutes: int = Field(ge=1, le=600)
    difficulty: Difficulty = Difficulty.MEDIUM


class ConnectionsRequest(_TopicRequest):
    """Request body for ``POST /api/v1/connections``."""

    subject: str = Field(min_length=1)


class RegulationQuestionRequest(BaseModel):
    """Request body for ``POST /api/v1/regulation/answer``."""

    question: str = Field(min_length=1)


class FlashcardOut(BaseModel):
    question: str
    answer: str


class QuizQuestionOut(BaseModel):
    question: str
    type: str
    options: list[str] = []
    correct: int | None = None
    answer: str | None = None


class RoutineSlotOut(BaseModel):
    start: str
    end: str
    activity: str
    type: str


class LessonSectionOut(BaseModel):
    title: str
    content: str
    duration: int


class LessonPlanOut(BaseModel):
    title: str
    objective: str
    materials: list[str]
    sections: list[LessonSectionOut]
    assessment: str
    total_duration: int


class ConnectionOut(BaseModel):
    subject: str
    connection: str


class RegulationAnswerOut(BaseModel):
    answer: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
