"""Completion gateway — the single validated path to the text-generation provider.

The gateway owns the credential check, delegates the outbound call to a
:class:`CompletionTransport`, and turns the returned text into either a
schema-validated :class:`Structured` value or plain :class:`Text`.
"""

from __future__ import annotations

import json
import logging

from study_aids.domain.entities import GenerationRequest, GenerationResult, Structured, Text
from study_aids.domain.exceptions import (
    GatewayError,
    MalformedResponseError,
    MissingCredentialError,
    TransportFailureError,
)
from study_aids.domain.ports.completion_transport import CompletionTransport, TransportFactory
from study_aids.domain.value_objects import configured_credential

logger = logging.getLogger(__name__)


class CompletionGateway:
    """Schema-validated prompt-completion gateway.

    Parameters
    ----------
    api_key:
        Provider credential.  Read once; an unconfigured value makes every
        :meth:`complete` call fail with :class:`MissingCredentialError`.
    transport_factory:
        Builds the provider transport from the credential.  Only invoked
        when a credential is configured.
    """

    def __init__(self, api_key: str | None, transport_factory: TransportFactory) -> None:
        self._transport: CompletionTransport | None = None
        credential = configured_credential(api_key)
        if credential is not None:
            self._transport = transport_factory(credential)

    @property
    def configured(self) -> bool:
        return self._transport is not None

    async def complete(self, request: GenerationRequest) -> GenerationResult:
        """Issue one provider call and return its parsed result."""
        if self._transport is None:
            raise MissingCredentialError(
                "Missing API key. Set the API_KEY environment variable."
            )

        logger.debug(
            "Completion request: model=%s schema=%s",
            request.model,
            request.response_schema is not None,
        )

        try:
            text = await self._transport.generate(request)
        except GatewayError:
            raise
        except Exception as exc:
            raise TransportFailureError(f"LLM call failed: {exc}") from exc

        if request.response_schema is None:
            return Text(text or "")

        raw = (text or "").strip()
        if not raw:
            raise MalformedResponseError("LLM returned an empty response.")

        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(f"LLM returned invalid JSON: {exc}") from exc

        request.response_schema.validate(value)
        return Structured(value)

    async def close(self) -> None:
        """Release the transport's HTTP resources."""
        if self._transport is not None:
            await self._transport.close()
