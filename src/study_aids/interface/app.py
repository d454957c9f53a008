"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from study_aids.interface.dependencies import shutdown, startup
from study_aids.interface.error_handlers import register_error_handlers
from study_aids.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of the shared completion gateway."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Study Aids",
        version="1.0.0",
        description=(
            "Generates flashcards, quizzes, tests, study routines, lesson plans "
            "and interdisciplinary connections with a hosted LLM, and answers "
            "questions about the school regulation."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
