"""Transport selection — maps the configured provider to an adapter class."""

from __future__ import annotations

from study_aids.domain.ports.completion_transport import TransportFactory
from study_aids.infrastructure.config import Settings
from study_aids.infrastructure.gemini_adapter import GeminiTransport
from study_aids.infrastructure.openai_adapter import OpenAITransport

_FACTORIES: dict[str, TransportFactory] = {
    "gemini": GeminiTransport,
    "openai": OpenAITransport,
}


def build_transport_factory(settings: Settings) -> TransportFactory:
    """Return the transport constructor for ``settings.llm_provider``."""
    return _FACTORIES[settings.llm_provider]
