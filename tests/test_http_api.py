"""Tests for the FastAPI link adapter."""

from __future__ import annotations

from urllib.parse import urlsplit

import pytest
from fastapi.testclient import TestClient

from aiassistant.api.http_api import app
from aiassistant.messages import codec

from .conftest import make_image_result, make_text_result


@pytest.fixture
def api():
    return TestClient(app)


def _path(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.path}?{parts.query}"


def test_list_models(api):
    body = api.get("/v1/models").json()

    assert [m["id"] for m in body["text"]] == ["claude", "gpt4", "gemini", "perplexity"]
    assert body["image"] == [{"id": "dalle", "displayName": "DALL-E 3", "icon": "🎨"}]


def test_resolve_text_link(api):
    result = make_text_result()

    response = api.get(_path(codec.encode(result)))

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "text"
    assert body["textResponse"]["text"] == result.text
    assert body["textResponse"]["model"] == "perplexity"
    assert body["textResponse"]["citations"][0]["title"] == "Paris"
    assert "imageResponse" not in body


def test_resolve_image_link_uses_placeholder(api):
    response = api.get(_path(codec.encode(make_image_result())))

    assert response.status_code == 200
    assert response.json()["imageResponse"]["imageUrl"] == "mock://placeholder"


def test_resolve_link_keeps_literal_plus(api):
    response = api.get("/response?type=text&text=1+1=2&model=claude&timestamp=1")

    assert response.status_code == 200
    assert response.json()["textResponse"]["text"] == "1+1=2"


def test_resolve_unknown_model_is_404(api):
    response = api.get("/response?type=text&text=hi&model=unknown-xyz")

    assert response.status_code == 404
    assert response.json() == {"error": "Unrecognized response link"}


def test_compose_text_card(api):
    result = make_text_result()

    response = api.post(
        "/v1/messages",
        json={"type": "text", "result": result.model_dump(mode="json", by_alias=True)},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["caption"] == "Perplexity • 2 sources"
    assert codec.decode(body["url"]).text_response == result


def test_compose_image_card(api):
    result = make_image_result()

    response = api.post(
        "/v1/messages",
        json={"type": "image", "result": result.model_dump(mode="json", by_alias=True)},
    )

    assert response.status_code == 200
    assert response.json()["caption"] == "DALL-E 3 • Generated Image"


def test_compose_rejects_invalid_payload(api):
    response = api.post("/v1/messages", json={"type": "text", "result": {"text": "missing fields"}})

    assert response.status_code == 400


def test_compose_rejects_unknown_type(api):
    response = api.post("/v1/messages", json={"type": "video", "result": {}})

    assert response.status_code == 400
    assert response.json() == {"error": "Unknown result type"}
