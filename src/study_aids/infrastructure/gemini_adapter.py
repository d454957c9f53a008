"""Google Gemini adapter — implements the CompletionTransport port."""

from __future__ import annotations

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from study_aids.domain.entities import GenerationRequest
from study_aids.domain.exceptions import TransportFailureError
from study_aids.domain.value_objects import SchemaDescriptor, SchemaKind

logger = logging.getLogger(__name__)


def to_gemini_schema(descriptor: SchemaDescriptor) -> types.Schema:
    """Translate a descriptor tree into the SDK's OpenAPI-subset schema."""
    schema = types.Schema(
        type=types.Type(descriptor.kind.value.upper()),
        description=descriptor.description,
    )
    if descriptor.kind is SchemaKind.OBJECT:
        schema.properties = {
            name: to_gemini_schema(child) for name, child in descriptor.properties.items()
        }
        if descriptor.required:
            schema.required = list(descriptor.required)
    elif descriptor.kind is SchemaKind.ARRAY:
        assert descriptor.items is not None
        schema.items = to_gemini_schema(descriptor.items)
    return schema


class GeminiTransport:
    """Concrete ``CompletionTransport`` backed by the Gemini ``generate_content`` API."""

    def __init__(self, api_key: str) -> None:
        self._client = genai.Client(api_key=api_key)

    async def generate(self, request: GenerationRequest) -> str | None:
        """Send the prompt (plus optional system instruction / schema) and return the text."""
        config = types.GenerateContentConfig(system_instruction=request.system_instruction)
        if request.response_schema is not None:
            config.response_mime_type = "application/json"
            config.response_schema = to_gemini_schema(request.response_schema)

        try:
            response = await self._client.aio.models.generate_content(
                model=request.model,
                contents=request.prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            logger.error("Gemini APIError %s: %s", exc.code, exc.message)
            raise TransportFailureError(
                f"Gemini API returned HTTP {exc.code}: {exc.message}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportFailureError(f"Network error calling Gemini: {exc}") from exc

        return response.text

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.aio.aclose()
