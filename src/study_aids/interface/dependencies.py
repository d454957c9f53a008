"""FastAPI dependency injection wiring."""

from __future__ import annotations

from study_aids.infrastructure.config import get_settings
from study_aids.infrastructure.transports import build_transport_factory
from study_aids.services.completion_gateway import CompletionGateway
from study_aids.services.study_aid_service import StudyAidService

_gateway: CompletionGateway | None = None


async def startup() -> None:
    """Initialise the shared gateway — called from the lifespan context manager."""
    global _gateway  # noqa: PLW0603

    settings = get_settings()
    _gateway = CompletionGateway(
        api_key=settings.credential(),
        transport_factory=build_transport_factory(settings),
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _gateway  # noqa: PLW0603

    if _gateway:
        await _gateway.close()
        _gateway = None


def get_study_aid_service() -> StudyAidService:
    """Build the use-case object around the shared gateway."""
    settings = get_settings()

    assert _gateway is not None, "startup() was not called"

    return StudyAidService(
        gateway=_gateway,
        model=settings.llm_model,
        language=settings.output_language,
        regulation_text=settings.regulation_text,
    )
