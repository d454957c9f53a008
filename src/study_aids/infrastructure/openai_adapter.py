"""OpenAI adapter — implements the CompletionTransport port."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, AuthenticationError, OpenAIError, RateLimitError

from study_aids.domain.entities import GenerationRequest
from study_aids.domain.exceptions import TransportFailureError

logger = logging.getLogger(__name__)


class OpenAITransport:
    """Concrete ``CompletionTransport`` backed by the OpenAI chat-completions API."""

    def __init__(self, api_key: str, max_retries: int = 0) -> None:
        self._client = AsyncOpenAI(api_key=api_key, max_retries=max_retries)

    async def generate(self, request: GenerationRequest) -> str | None:
        """Send the prompt and return the completion text."""
        messages: list[dict[str, str]] = []
        if request.system_instruction:
            messages.append({"role": "system", "content": request.system_instruction})
        messages.append({"role": "user", "content": request.prompt})

        kwargs: dict[str, object] = {"model": request.model, "messages": messages}
        if request.response_schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "study_aid",
                    "schema": request.response_schema.to_json_schema(),
                    "strict": False,
                },
            }

        try:
            response = await self._client.chat.completions.create(**kwargs)  # type: ignore[call-overload]

        except AuthenticationError as exc:
            raise TransportFailureError(
                "Invalid OpenAI API key. "
                "Set a valid key in the API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            detail = str(exc)
            logger.error("OpenAI RateLimitError: %s", detail)
            raise TransportFailureError(
                f"OpenAI rate limit / quota error: {detail}"
            ) from exc

        except OpenAIError as exc:
            raise TransportFailureError(f"OpenAI call failed: {exc}") from exc

        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
