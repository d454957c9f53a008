"""API routes — thin controllers that delegate to the study-aid service."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends

from study_aids.interface.dependencies import get_study_aid_service
from study_aids.interface.schemas import (
    ConnectionOut,
    ConnectionsRequest,
    ErrorResponse,
    FlashcardOut,
    FlashcardsRequest,
    LessonPlanOut,
    LessonPlanRequest,
    QuestionsRequest,
    QuizQuestionOut,
    RegulationAnswerOut,
    RegulationQuestionRequest,
    RoutineRequest,
    RoutineSlotOut,
)
from study_aids.services.study_aid_service import StudyAidService

router = APIRouter(prefix="/api/v1")

_GATEWAY_ERRORS: dict[int | str, dict[str, Any]] = {
    422: {"model": ErrorResponse, "description": "Invalid parameters"},
    502: {
        "model": ErrorResponse,
        "description": "LLM provider error or malformed provider response",
    },
    503: {"model": ErrorResponse, "description": "API key not configured"},
}


@router.post("/flashcards", response_model=list[FlashcardOut], responses=_GATEWAY_ERRORS)
async def flashcards(
    body: FlashcardsRequest,
    service: StudyAidService = Depends(get_study_aid_service),
) -> list[FlashcardOut]:
    """Generate flashcards for a topic."""
    cards = await service.generate_flashcards(body.topic, body.count)
    return [FlashcardOut(question=c.question, answer=c.answer) for c in cards]


@router.post("/quiz", response_model=list[QuizQuestionOut], responses=_GATEWAY_ERRORS)
async def quiz(
    body: QuestionsRequest,
    service: StudyAidService = Depends(get_study_aid_service),
) -> list[QuizQuestionOut]:
    """Generate a student quiz."""
    questions = await service.generate_quiz(
        body.topic, body.num_questions, body.mode, body.difficulty
    )
    return [QuizQuestionOut(**asdict(q)) for q in questions]


@router.post("/test", response_model=list[QuizQuestionOut], responses=_GATEWAY_ERRORS)
async def test_questions(
    body: QuestionsRequest,
    service: StudyAidService = Depends(get_study_aid_service),
) -> list[QuizQuestionOut]:
    """Generate a classroom test."""
    questions = await service.generate_test_questions(
        body.topic, body.num_questions, body.mode, body.difficulty
    )
    return [QuizQuestionOut(**asdict(q)) for q in questions]


@router.post("/routine", response_model=list[RoutineSlotOut], responses=_GATEWAY_ERRORS)
async def routine(
    body: RoutineRequest,
    service: StudyAidService = Depends(get_study_aid_service),
) -> list[RoutineSlotOut]:
    """Plan a study schedule between two times."""
    slots = await service.generate_routine(
        body.start_time, body.end_time, body.tasks, body.commitments
    )
    return [RoutineSlotOut(**asdict(s)) for s in slots]


@router.post("/lesson-plan", response_model=LessonPlanOut, responses=_GATEWAY_ERRORS)
async def lesson_plan(
    body: LessonPlanRequest,
    service: StudyAidService = Depends(get_study_aid_service),
) -> LessonPlanOut:
    """Generate a lesson plan."""
    plan = await service.generate_lesson_plan(
        body.topic, body.duration_minutes, body.difficulty
    )
    return LessonPlanOut(**asdict(plan), total_duration=plan.total_duration)


@router.post("/connections", response_model=list[ConnectionOut], responses=_GATEWAY_ERRORS)
async def connections(
    body: ConnectionsRequest,
    service: StudyAidService = Depends(get_study_aid_service),
) -> list[ConnectionOut]:
    """Suggest interdisciplinary connections for a topic."""
    links = await service.generate_interdisciplinary_connections(body.topic, body.subject)
    return [ConnectionOut(subject=c.subject, connection=c.connection) for c in links]


@router.post("/regulation/answer", response_model=RegulationAnswerOut)
async def regulation_answer(
    body: RegulationQuestionRequest,
    service: StudyAidService = Depends(get_study_aid_service),
) -> RegulationAnswerOut:
    """Answer a question about the school regulation (falls back on provider failure)."""
    answer = await service.answer_regulation_question(body.question)
    return RegulationAnswerOut(answer=answer)
