"""Tests for the FastAPI service mode."""

from __future__ import annotations

from typing import Callable

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from codeshift.limits import RateLimiter
from codeshift.service import create_app
from codeshift.session import ConverterSession
from tests._fixtures.clock import FakeClock

JSON_TEXT = '{"name": "John", "age": 30}'


@pytest.fixture
def session(make_session: Callable[..., ConverterSession]) -> ConverterSession:
    return make_session()


@pytest.fixture
def client(session: ConverterSession) -> TestClient:
    return TestClient(create_app(lambda: session))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_languages_endpoint(client: TestClient) -> None:
    response = client.get("/languages")
    assert response.status_code == 200
    languages = {item["tag"]: item for item in response.json()["languages"]}
    assert languages["python"]["name"] == "Python"
    assert languages["yaml"]["family"] == "data"


def test_detect_endpoint(client: TestClient) -> None:
    response = client.post("/detect", json={"text": JSON_TEXT})
    assert response.status_code == 200
    payload = response.json()
    assert payload["language"] == "json"
    assert payload["scores"]["json"] >= 1


def test_suggest_endpoint_with_and_without_language(client: TestClient) -> None:
    detected = client.post("/suggest", json={"text": JSON_TEXT}).json()
    explicit = client.post("/suggest", json={"text": "a { color: red; }", "language": "CSS"}).json()

    assert detected["language"] == "json"
    assert [item["id"] for item in detected["suggestions"]] == ["json-yaml", "json-xml"]
    assert explicit["language"] == "css"
    assert [item["id"] for item in explicit["suggestions"]] == ["css-scss"]


def test_convert_endpoint_records_history(client: TestClient) -> None:
    response = client.post("/convert", json={"text": JSON_TEXT, "source": "json", "target": "yaml"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["result"] == "name: John\nage: 30"
    assert payload["source"] == "json"
    entry_id = payload["entry"]["id"]

    listing = client.get("/history").json()["entries"]
    assert [item["id"] for item in listing] == [entry_id]
    restored = client.get(f"/history/{entry_id}").json()
    assert restored["conversion_label"] == "Convert to YAML"

    cleared = client.delete("/history")
    assert cleared.json() == {"removed": 1}
    assert client.get("/history").json() == {"entries": []}


def test_convert_detects_missing_source(client: TestClient) -> None:
    response = client.post("/convert", json={"text": JSON_TEXT, "target": "xml"})

    assert response.status_code == 200
    assert response.json()["source"] == "json"
    assert "<name>John</name>" in response.json()["result"]


def test_convert_without_detectable_source_returns_422(client: TestClient) -> None:
    response = client.post("/convert", json={"text": "hello world", "target": "yaml"})

    assert response.status_code == 422
    assert response.json()["field"] == "source"


def test_convert_rejects_dangerous_input(client: TestClient) -> None:
    response = client.post(
        "/convert",
        json={"text": "eval(payload)", "source": "javascript", "target": "typescript"},
    )

    assert response.status_code == 422
    assert response.json()["field"] == "text"


def test_malformed_input_returns_400(client: TestClient) -> None:
    response = client.post("/convert", json={"text": '{"name": }', "source": "json", "target": "yaml"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["stage"] == "decode"
    assert payload["detail"].startswith("Invalid JSON format")


def test_rate_limit_returns_429(make_session: Callable[..., ConverterSession]) -> None:
    limiter = RateLimiter(max_requests=1, window_seconds=30.0, clock=FakeClock())
    session = make_session(limiter=limiter)
    client = TestClient(create_app(lambda: session))
    body = {"text": JSON_TEXT, "source": "json", "target": "yaml"}

    assert client.post("/convert", json=body).status_code == 200
    response = client.post("/convert", json=body)

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "30"
    assert response.json()["retry_after"] == 30.0


def test_unknown_history_entry_returns_404(client: TestClient) -> None:
    response = client.get("/history/unknown")
    assert response.status_code == 404


def test_missing_text_field_is_rejected(client: TestClient) -> None:
    response = client.post("/detect", json={})
    assert response.status_code == 422


def test_history_entry_html_escapes_the_result(client: TestClient) -> None:
    entry_id = client.post(
        "/convert", json={"text": JSON_TEXT, "source": "json", "target": "xml"}
    ).json()["entry"]["id"]

    response = client.get(f"/history/{entry_id}/html")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "&lt;name&gt;John&lt;&#x2F;name&gt;" in response.text
    assert "<name>" not in response.text
    assert client.get("/history/unknown/html").status_code == 404
