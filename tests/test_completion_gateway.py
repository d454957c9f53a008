from __future__ import annotations

import json

import pytest

from study_aids.domain.entities import GenerationRequest, Structured, Text
from study_aids.domain.exceptions import (
    InvalidRequestError,
    InvalidSchemaError,
    MalformedResponseError,
    MissingCredentialError,
    TransportFailureError,
)
from study_aids.domain.value_objects import SchemaDescriptor as S
from study_aids.domain.value_objects import configured_credential
from study_aids.services.completion_gateway import CompletionGateway

FLASHCARD_SCHEMA = S.array_of(
    S.object_of(
        {"question": S.string(), "answer": S.string()},
        required=["question", "answer"],
    )
)


def _flashcard_request() -> GenerationRequest:
    return GenerationRequest(
        model="m1",
        prompt="Generate 5 flashcards for topic X",
        response_schema=FLASHCARD_SCHEMA,
    )


@pytest.mark.asyncio
async def test_schema_request_returns_structured_value(transport, make_gateway):
    cards = [{"question": f"Q{i}", "answer": f"A{i}"} for i in range(1, 6)]
    transport.replies.append(json.dumps(cards))

    result = await make_gateway().complete(_flashcard_request())

    assert result == Structured(cards)
    assert transport.call_count == 1
    assert transport.requests[0].model == "m1"


@pytest.mark.asyncio
async def test_schema_request_tolerates_surrounding_whitespace(transport, make_gateway):
    transport.replies.append('\n  [{"question": "Q", "answer": "A"}]  \n')

    result = await make_gateway().complete(_flashcard_request())

    assert isinstance(result, Structured)
    assert result.value == [{"question": "Q", "answer": "A"}]


@pytest.mark.asyncio
async def test_non_json_reply_is_malformed(transport, make_gateway):
    transport.replies.append("not json")

    with pytest.raises(MalformedResponseError):
        await make_gateway().complete(_flashcard_request())


@pytest.mark.asyncio
async def test_reply_missing_required_field_is_malformed(transport, make_gateway):
    transport.replies.append(json.dumps([{"question": "Q1"}]))

    with pytest.raises(MalformedResponseError, match="answer"):
        await make_gateway().complete(_flashcard_request())


@pytest.mark.asyncio
async def test_empty_reply_with_schema_is_malformed(transport, make_gateway):
    transport.replies.append(None)

    with pytest.raises(MalformedResponseError, match="empty"):
        await make_gateway().complete(_flashcard_request())


@pytest.mark.asyncio
async def test_text_request_returns_raw_text(transport, make_gateway):
    transport.replies.append("  The answer.  ")

    result = await make_gateway().complete(GenerationRequest(model="m1", prompt="hi"))

    assert result == Text("  The answer.  ")


@pytest.mark.asyncio
async def test_text_request_defaults_to_empty_string(transport, make_gateway):
    transport.replies.append(None)

    result = await make_gateway().complete(GenerationRequest(model="m1", prompt="hi"))

    assert result == Text("")


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", ["", "   ", "undefined", None])
async def test_missing_credential_fails_before_any_call(transport, make_gateway, api_key):
    gateway = make_gateway(api_key)

    assert not gateway.configured
    with pytest.raises(MissingCredentialError):
        await gateway.complete(_flashcard_request())
    assert transport.call_count == 0


def test_transport_factory_not_called_without_credential():
    calls: list[str] = []

    def factory(key: str):
        calls.append(key)
        raise AssertionError("factory should not be called")

    CompletionGateway(api_key="", transport_factory=factory)

    assert calls == []


def test_credential_is_stripped_before_building_transport(transport):
    seen: list[str] = []

    def factory(key: str):
        seen.append(key)
        return transport

    CompletionGateway(api_key="  secret  ", transport_factory=factory)

    assert seen == ["secret"]


@pytest.mark.asyncio
async def test_transport_failure_propagates(transport, make_gateway):
    transport.replies.append(TransportFailureError("HTTP 500"))

    with pytest.raises(TransportFailureError, match="HTTP 500"):
        await make_gateway().complete(_flashcard_request())


@pytest.mark.asyncio
async def test_unexpected_transport_exception_is_wrapped(transport, make_gateway):
    cause = ConnectionRefusedError("refused")
    transport.replies.append(cause)

    with pytest.raises(TransportFailureError) as excinfo:
        await make_gateway().complete(GenerationRequest(model="m1", prompt="hi"))

    assert excinfo.value.__cause__ is cause


@pytest.mark.asyncio
async def test_close_releases_transport(transport, make_gateway):
    await make_gateway().close()

    assert transport.closed


@pytest.mark.parametrize(
    ("api_key", "expected"),
    [
        ("key", "key"),
        (" key ", "key"),
        ("", None),
        (" ", None),
        ("undefined", None),
        (None, None),
    ],
)
def test_configured_credential(api_key, expected):
    assert configured_credential(api_key) == expected


@pytest.mark.parametrize(
    ("model", "prompt"),
    [("", "p"), ("m", ""), ("m", "   "), (None, "p"), ("m", None), ("m", 5), (3, "p")],
)
def test_request_rejects_empty_or_non_string_fields(model, prompt):
    with pytest.raises(InvalidRequestError):
        GenerationRequest(model=model, prompt=prompt)


@pytest.mark.asyncio
async def test_malformed_schema_never_reaches_transport(transport, make_gateway):
    gateway = make_gateway()

    with pytest.raises(InvalidSchemaError):
        await gateway.complete(
            GenerationRequest(
                model="m1",
                prompt="p",
                response_schema=S.array_of(S.object_of({"question": "string"})),
            )
        )
    assert transport.call_count == 0
