from __future__ import annotations

from typing import Callable

import pytest

from study_aids.domain.entities import GenerationRequest
from study_aids.services.completion_gateway import CompletionGateway


class FakeTransport:
    """Records requests and replays canned provider replies (or raises them)."""

    def __init__(self, replies: list[str | None | Exception] | None = None) -> None:
        self.replies = list(replies or [])
        self.requests: list[GenerationRequest] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def generate(self, request: GenerationRequest) -> str | None:
        self.requests.append(request)
        reply = self.replies.pop(0) if self.replies else None
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def make_gateway(transport: FakeTransport) -> Callable[..., CompletionGateway]:
    def _make(api_key: str | None = "test-key") -> CompletionGateway:
        return CompletionGateway(api_key=api_key, transport_factory=lambda _key: transport)

    return _make
