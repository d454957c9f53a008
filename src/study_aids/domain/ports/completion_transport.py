"""Port: completion transport — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Callable, Protocol

from study_aids.domain.entities import GenerationRequest


class CompletionTransport(Protocol):
    """Abstract contract for the one outbound call to a text-generation provider."""

    async def generate(self, request: GenerationRequest) -> str | None:
        """Send the request and return the provider's raw text (``None`` if empty).

        Provider and network errors must be raised as ``TransportFailureError``.
        """
        ...

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        ...


TransportFactory = Callable[[str], CompletionTransport]
