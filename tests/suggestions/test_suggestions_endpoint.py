from __future__ import annotations

import asyncio
import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.llm.deps import get_openai_client
from app.core.settings import get_settings
from app.main import create_app
from tests.suggestions._helpers import (
    FakeProvider,
    assert_cors_headers,
    completion,
    make_openai_client,
)

VALID_BODY = {"field": "currentFinancialSituation", "language": "en"}


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(lambda request: completion("  Hello world.  "))


@pytest.fixture
def suggestion_client(provider: FakeProvider) -> TestClient:
    app = create_app()
    openai_client = make_openai_client(provider)
    app.dependency_overrides[get_openai_client] = lambda: openai_client
    with TestClient(app) as c:
        yield c


def _client_for(provider: FakeProvider, *, timeout_seconds: float = 20.0) -> TestClient:
    app = create_app()
    openai_client = make_openai_client(provider, timeout_seconds=timeout_seconds)
    app.dependency_overrides[get_openai_client] = lambda: openai_client
    return TestClient(app)


def test_post_suggestion_success_trims_whitespace(
    suggestion_client: TestClient, provider: FakeProvider
) -> None:
    res = suggestion_client.post("/suggestions", json=VALID_BODY)
    assert res.status_code == 200, res.text
    assert res.json() == {"suggestion": "Hello world."}
    assert_cors_headers(res)
    assert "X-Request-ID" in res.headers
    assert provider.calls == 1


def test_post_suggestion_sends_one_system_and_one_user_message(
    suggestion_client: TestClient, provider: FakeProvider
) -> None:
    body = {
        "field": "reasonForApplying",
        "language": "ar",
        "applicantDetails": "single parent of two",
        "existingText": "rent doubled this year",
    }
    res = suggestion_client.post("/suggestions", json=body)
    assert res.status_code == 200, res.text

    payload = provider.last_payload()
    assert payload["model"] == "gpt-4o-mini"
    assert payload["temperature"] == 0.6
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    user_prompt = payload["messages"][1]["content"]
    assert "Write the paragraph in Arabic." in user_prompt
    assert "Applicant context: single parent of two." in user_prompt
    assert "Applicant notes: rent doubled this year" in user_prompt

    request = provider.requests[-1]
    assert request.url == "https://llm.test/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"language": "en"},
        {"field": "reasonForApplying"},
        {"field": "", "language": "en"},
        {"field": "reasonForApplying", "language": ""},
        {"field": "reasonForApplying", "language": None},
        {"field": 3, "language": "en"},
    ],
)
def test_missing_required_fields_returns_400_without_provider_call(
    suggestion_client: TestClient, provider: FakeProvider, body: dict
) -> None:
    res = suggestion_client.post("/suggestions", json=body)
    assert res.status_code == 400
    assert res.json() == {"error": "Missing required fields."}
    assert_cors_headers(res)
    assert provider.calls == 0


def test_unparseable_body_returns_400(
    suggestion_client: TestClient, provider: FakeProvider
) -> None:
    res = suggestion_client.post(
        "/suggestions", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Missing required fields."}
    assert provider.calls == 0


def test_non_object_body_returns_400(suggestion_client: TestClient, provider: FakeProvider) -> None:
    res = suggestion_client.post("/suggestions", json=["field", "language"])
    assert res.status_code == 400
    assert res.json() == {"error": "Missing required fields."}
    assert provider.calls == 0


def test_unsupported_field_returns_400(suggestion_client: TestClient, provider: FakeProvider) -> None:
    res = suggestion_client.post("/suggestions", json={"field": "hobbies", "language": "en"})
    assert res.status_code == 400
    assert res.json()["error"].startswith("Unsupported field.")
    assert provider.calls == 0


def test_non_string_optional_text_returns_400(
    suggestion_client: TestClient, provider: FakeProvider
) -> None:
    res = suggestion_client.post("/suggestions", json={**VALID_BODY, "existingText": 42})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid request body."}
    assert provider.calls == 0


def test_provider_error_propagates_status_and_message() -> None:
    provider = FakeProvider(
        lambda request: httpx.Response(429, json={"error": {"message": "quota exceeded"}})
    )
    with _client_for(provider) as client:
        res = client.post("/suggestions", json=VALID_BODY)

    assert res.status_code == 429
    assert res.json() == {"error": "quota exceeded"}
    assert_cors_headers(res)
    assert provider.calls == 1


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="<html>upstream down</html>"),
        httpx.Response(401, json={"error": "bad key"}),
        httpx.Response(500, json={"error": {"message": 12}}),
    ],
)
def test_provider_error_without_message_uses_generic_text(response: httpx.Response) -> None:
    provider = FakeProvider(lambda request: response)
    with _client_for(provider) as client:
        res = client.post("/suggestions", json=VALID_BODY)

    assert res.status_code == response.status_code
    assert res.json() == {"error": "Unable to generate suggestion."}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={}),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {}}]}),
        completion(None),
        completion(""),
        completion("   \n"),
    ],
)
def test_missing_content_returns_500(response: httpx.Response) -> None:
    provider = FakeProvider(lambda request: response)
    with _client_for(provider) as client:
        res = client.post("/suggestions", json=VALID_BODY)

    assert res.status_code == 500
    assert res.json() == {"error": "No suggestion received."}
    assert_cors_headers(res)


def test_provider_timeout_uses_client_deadline(monkeypatch: pytest.MonkeyPatch) -> None:
    # The deadline comes from the client configuration, not a per-request settings lookup.
    monkeypatch.setenv("OPENAI_TIMEOUT_SECONDS", "30")
    get_settings.cache_clear()

    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return completion("too late")

    provider = FakeProvider(slow)
    with _client_for(provider, timeout_seconds=0.05) as client:
        res = client.post("/suggestions", json=VALID_BODY)

    assert res.status_code == 504
    assert res.json() == {"error": "The request timed out."}
    assert_cors_headers(res)
    assert provider.calls == 1


def test_transport_timeout_returns_504() -> None:
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    provider = FakeProvider(timeout)
    with _client_for(provider) as client:
        res = client.post("/suggestions", json=VALID_BODY)

    assert res.status_code == 504
    assert res.json() == {"error": "The request timed out."}


def test_connection_failure_returns_500_with_message() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = FakeProvider(refuse)
    with _client_for(provider) as client:
        res = client.post("/suggestions", json=VALID_BODY)

    assert res.status_code == 500
    assert res.json() == {"error": "connection refused"}
    assert_cors_headers(res)


def test_malformed_success_body_returns_500() -> None:
    provider = FakeProvider(lambda request: httpx.Response(200, text="not json"))
    with _client_for(provider) as client:
        res = client.post("/suggestions", json=VALID_BODY)

    assert res.status_code == 500
    assert res.json()["error"]


def test_options_returns_204_with_cors_headers(
    suggestion_client: TestClient, provider: FakeProvider
) -> None:
    res = suggestion_client.options("/suggestions")
    assert res.status_code == 204
    assert res.content == b""
    assert_cors_headers(res)

    res = suggestion_client.request(
        "OPTIONS",
        "/suggestions",
        content=b"garbage",
        headers={"Origin": "https://forms.example", "Access-Control-Request-Method": "POST"},
    )
    assert res.status_code == 204
    assert res.content == b""
    assert_cors_headers(res)
    assert provider.calls == 0


def test_model_override_is_sent_to_provider() -> None:
    provider = FakeProvider(lambda request: completion("Done."))
    app = create_app()
    openai_client = make_openai_client(provider, model="gpt-4.1-mini")
    app.dependency_overrides[get_openai_client] = lambda: openai_client
    with TestClient(app) as client:
        res = client.post("/suggestions", json=VALID_BODY)

    assert res.status_code == 200
    assert provider.last_payload()["model"] == "gpt-4.1-mini"


def test_failed_request_logs_one_suggestion_record(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    provider = FakeProvider(
        lambda request: httpx.Response(429, json={"error": {"message": "quota exceeded"}})
    )
    with _client_for(provider) as client:
        res = client.post("/suggestions", json={**VALID_BODY, "existingText": "rent arrears"})

    assert res.status_code == 429
    records = [r for r in caplog.records if r.name != "app.http" and r.name.startswith("app.")]
    assert len(records) == 1

    record = records[0]
    assert record.name == "app.suggestions"
    assert record.__dict__["request_id"] == res.headers["x-request-id"]
    assert record.__dict__["field"] == "currentFinancialSituation"
    assert record.__dict__["language"] == "English"
    assert record.__dict__["status_code"] == 429
    assert record.__dict__["outcome"] == "provider_error"
    assert record.__dict__["success"] is False
    assert "rent arrears" not in caplog.text
