from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from study_aids.domain.exceptions import (
    GatewayError,
    InvalidSchemaError,
    MalformedResponseError,
    MissingCredentialError,
    StudyAidsError,
    TransportFailureError,
)
from study_aids.interface.app import create_app
from study_aids.interface.dependencies import get_study_aid_service
from study_aids.interface.error_handlers import status_for
from study_aids.services import prompts
from study_aids.services.study_aid_service import StudyAidService


@pytest.fixture()
def client(make_gateway) -> TestClient:
    app = create_app()
    service = StudyAidService(make_gateway(), model="m")
    app.dependency_overrides[get_study_aid_service] = lambda: service
    return TestClient(app)


@pytest.fixture()
def unconfigured_client(make_gateway) -> TestClient:
    app = create_app()
    service = StudyAidService(make_gateway(""), model="m")
    app.dependency_overrides[get_study_aid_service] = lambda: service
    return TestClient(app)


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_flashcards(client: TestClient, transport):
    transport.replies.append(json.dumps([{"question": "Q1", "answer": "A1"}]))

    response = client.post("/api/v1/flashcards", json={"topic": "Rome", "count": 1})

    assert response.status_code == 200
    assert response.json() == [{"question": "Q1", "answer": "A1"}]


def test_quiz(client: TestClient, transport):
    transport.replies.append(
        json.dumps([{"question": "Q", "type": "multiple", "options": ["a", "b"], "correct": 1}])
    )

    response = client.post(
        "/api/v1/quiz",
        json={"topic": "Rome", "num_questions": 1, "mode": "multiple", "difficulty": "easy"},
    )

    assert response.status_code == 200
    assert response.json() == [
        {"question": "Q", "type": "multiple", "options": ["a", "b"], "correct": 1, "answer": None}
    ]


def test_test_questions(client: TestClient, transport):
    transport.replies.append(json.dumps([{"question": "Define X", "type": "definition"}]))

    response = client.post("/api/v1/test", json={"topic": "X", "num_questions": 1})

    assert response.status_code == 200
    assert response.json()[0]["type"] == "definition"


def test_routine(client: TestClient, transport):
    transport.replies.append(
        json.dumps([{"start": "09:00", "end": "10:00", "activity": "Latin", "type": "study"}])
    )

    response = client.post(
        "/api/v1/routine",
        json={"start_time": "09:00", "end_time": "12:00", "tasks": "Latin"},
    )

    assert response.status_code == 200
    assert response.json()[0]["activity"] == "Latin"


def test_lesson_plan(client: TestClient, transport):
    transport.replies.append(
        json.dumps(
            {
                "title": "T",
                "objective": "O",
                "materials": ["Book"],
                "sections": [
                    {"title": "A", "content": "a", "duration": 20},
                    {"title": "B", "content": "b", "duration": 25},
                ],
                "assessment": "Quiz",
            }
        )
    )

    response = client.post(
        "/api/v1/lesson-plan",
        json={"topic": "T", "duration_minutes": 45, "difficulty": "hard"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["materials"] == ["Book"]
    assert body["sections"][1] == {"title": "B", "content": "b", "duration": 25}
    assert body["total_duration"] == 45


def test_connections(client: TestClient, transport):
    transport.replies.append(json.dumps([{"subject": "Art", "connection": "c"}]))

    response = client.post("/api/v1/connections", json={"topic": "T", "subject": "History"})

    assert response.status_code == 200
    assert response.json() == [{"subject": "Art", "connection": "c"}]


def test_regulation_answer(client: TestClient, transport):
    transport.replies.append("Only for teaching purposes.")

    response = client.post("/api/v1/regulation/answer", json={"question": "Phones?"})

    assert response.status_code == 200
    assert response.json() == {"answer": "Only for teaching purposes."}


def test_regulation_answer_falls_back_on_provider_error(client: TestClient, transport):
    transport.replies.append(TransportFailureError("timeout"))

    response = client.post("/api/v1/regulation/answer", json={"question": "Phones?"})

    assert response.status_code == 200
    assert response.json() == {"answer": prompts.REGULATION_FALLBACK_ANSWER}


def test_transport_failure_maps_to_502(client: TestClient, transport):
    transport.replies.append(TransportFailureError("Gemini API returned HTTP 500"))

    response = client.post("/api/v1/flashcards", json={"topic": "Rome"})

    assert response.status_code == 502
    assert response.json() == {"status": "error", "message": "Gemini API returned HTTP 500"}


def test_malformed_response_maps_to_502(client: TestClient, transport):
    transport.replies.append("not json")

    response = client.post("/api/v1/flashcards", json={"topic": "Rome"})

    assert response.status_code == 502
    assert response.json()["status"] == "error"


def test_missing_credential_maps_to_503(unconfigured_client: TestClient, transport):
    response = unconfigured_client.post("/api/v1/flashcards", json={"topic": "Rome"})

    assert response.status_code == 503
    assert "API_KEY" in response.json()["message"]
    assert transport.call_count == 0


@pytest.mark.parametrize(
    ("path", "payload"),
    [
        ("/api/v1/flashcards", {"topic": "   "}),
        ("/api/v1/quiz", {"topic": "T", "num_questions": 0}),
        ("/api/v1/quiz", {"topic": "T", "num_questions": 3, "mode": "both"}),
        ("/api/v1/regulation/answer", {"question": ""}),
    ],
)
def test_invalid_body_maps_to_422(client: TestClient, transport, path, payload):
    response = client.post(path, json=payload)

    assert response.status_code == 422
    assert response.json()["status"] == "error"
    assert transport.call_count == 0


def test_malformed_error_is_not_swallowed_outside_regulation(client: TestClient, transport):
    transport.replies.append(MalformedResponseError("bad shape"))

    response = client.post("/api/v1/connections", json={"topic": "T", "subject": "S"})

    assert response.status_code == 502
    assert response.json()["message"] == "bad shape"


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (InvalidSchemaError("x"), 422),
        (MissingCredentialError("x"), 503),
        (TransportFailureError("x"), 502),
        (MalformedResponseError("x"), 502),
        (GatewayError("x"), 502),
        (StudyAidsError("x"), 500),
    ],
)
def test_status_for(exc, expected):
    assert status_for(exc) == expected


def test_openapi_documents_error_envelope(client: TestClient):
    spec = client.get("/openapi.json").json()

    assert "ErrorResponse" in spec["components"]["schemas"]
    responses = spec["paths"]["/api/v1/flashcards"]["post"]["responses"]
    for status in ("422", "502", "503"):
        schema = responses[status]["content"]["application/json"]["schema"]
        assert schema["$ref"].endswith("/ErrorResponse")
