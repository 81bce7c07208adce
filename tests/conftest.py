"""
Shared fixtures and factories for the aiassistant test suite.

Backend calls are stubbed with `httpx.MockTransport`, so no test touches
the network.
"""

import base64
import json

import httpx
import pytest

from aiassistant.client import GenerationClient
from aiassistant.config import ClientConfig
from aiassistant.models import Citation, GenerationModel, ImageModel, ImageResult, TextResult

BASE_URL = "https://backend.test/api"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
PNG_DATA_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


def make_client(handler, **config_overrides) -> GenerationClient:
    """Create a client whose transport is served by `handler(request)`."""
    config = ClientConfig(base_url=config_overrides.pop("base_url", BASE_URL), **config_overrides)
    return GenerationClient(config=config, transport=httpx.MockTransport(handler))


def json_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


def make_text_result(**overrides) -> TextResult:
    data = {
        "text": "Paris is the capital of France.",
        "citations": [
            Citation(title="Paris", url="https://en.wikipedia.org/wiki/Paris", snippet="Capital city"),
            Citation(title="France", url="https://example.org/france"),
        ],
        "model": GenerationModel.PERPLEXITY,
        "timestamp": 1700000000.25,
    }
    data.update(overrides)
    return TextResult(**data)


def make_image_result(**overrides) -> ImageResult:
    data = {
        "image_url": "https://images.test/cat.png",
        "prompt": "a cat wearing a tiny hat",
        "model": ImageModel.DALLE,
        "timestamp": 1700000100.0,
    }
    data.update(overrides)
    return ImageResult(**data)


@pytest.fixture
def text_result() -> TextResult:
    return make_text_result()


@pytest.fixture
def image_result() -> ImageResult:
    return make_image_result()
