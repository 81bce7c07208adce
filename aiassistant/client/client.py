"""Backend transport client for text and image generation.

Architectural role:
    Executes exactly one HTTP round trip per generation call against the
    assistant backend and materializes typed results for the session layer.

Call flow:
    `GenerationSession.submit` -> `ask_text` / `generate_image_with_data`
    -> `_post_json` -> `_send` -> parsed `TextResult` / `ImageResult`.

Retry behavior:
    No retry loop is implemented. Each call is attempted once; retrying is a
    user action (re-submitting the preserved draft).

Timeouts:
    Every transport operation is bounded by `request_timeout` (60s default).
    The whole call is additionally bounded by `resource_timeout` (120s
    default); exceeding it raises `httpx.TimeoutException`.

Failure handling model:
    - Endpoint/image URL not buildable -> `InvalidURLError`
    - Non-2xx status -> `ServerError`
    - Body or base64/image payload not decodable -> `DecodingError`
    - Connectivity/timeouts -> `httpx.TransportError` family, unwrapped

Cancellation:
    Calls are plain coroutines; cancelling the awaiting task aborts the
    in-flight request at the transport level.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import time
from typing import Any, TypeVar
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, ValidationError

from aiassistant.client.errors import DecodingError, InvalidURLError, ServerError
from aiassistant.config import ASK_PATH, DEBUG, GENERATE_IMAGE_PATH, ClientConfig
from aiassistant.models import GenerationModel, ImageResult, TextResult


logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

DATA_URI_PREFIX = "data:image"
BASE64_MARKER = "base64,"

_IMAGE_SIGNATURES = (
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
    b"GIF87a",
    b"GIF89a",
)


def decode_data_uri(source: str) -> bytes:
    """Decode the base64 payload of a `data:image/...;base64,...` URI.

    Args:
        source: Inline image URI.

    Returns:
        Raw image bytes.

    Raises:
        DecodingError: Missing `base64,` marker, invalid or empty payload.
    """
    marker_index = source.find(BASE64_MARKER)
    if marker_index == -1:
        raise DecodingError("Inline image URI has no base64 payload")

    payload = source[marker_index + len(BASE64_MARKER):]
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodingError("Inline image payload is not valid base64") from exc

    if not data:
        raise DecodingError("Inline image payload is empty")
    return data


def looks_like_image(data: bytes) -> bool:
    """Return whether `data` starts with a PNG, JPEG, GIF, or WEBP signature."""
    if data.startswith(_IMAGE_SIGNATURES):
        return True
    return data[:4] == b"RIFF" and data[8:12] == b"WEBP"


class GenerationClient:
    """Async client for the `/ask` and `/generate-image` endpoints.

    Usage:
        async with GenerationClient() as client:
            result = await client.ask_text("What is 2+2?", GenerationModel.CLAUDE)

    Args:
        config: Endpoint and timeout configuration. Defaults to `ClientConfig()`.
        transport: Optional httpx transport, mainly for stubbing in tests.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.request_timeout),
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> GenerationClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def ask_text(
        self,
        question: str,
        model: GenerationModel,
        user_id: str | None = None,
    ) -> TextResult:
        """Ask one question of a text model.

        Args:
            question: User prompt. Non-emptiness is the caller's concern.
            model: Backend to route the question to.
            user_id: Anonymous device identifier, or `None`.

        Returns:
            Parsed `TextResult`; `citations` may be empty.
        """
        body = {"question": question, "model": model.value, "userId": user_id}
        logger.info("Asking %s", model.value)
        return await self._post_json(ASK_PATH, body, TextResult)

    async def generate_image(self, prompt: str, user_id: str | None = None) -> ImageResult:
        """Request one generated image.

        The returned `image_url` may be a normal URL or a `data:` URI.
        """
        body = {"prompt": prompt, "userId": user_id}
        logger.info("Requesting image generation")
        return await self._post_json(GENERATE_IMAGE_PATH, body, ImageResult)

    async def download_image(self, source: str) -> bytes:
        """Materialize image bytes from a URL or an inline `data:` URI.

        Inline URIs are decoded locally without any network call.

        Raises:
            DecodingError: Inline payload is not valid base64.
            InvalidURLError: `source` is neither a data URI nor an HTTP(S) URL.
            ServerError: GET answered with a non-2xx status.
        """
        if source.startswith(DATA_URI_PREFIX):
            data = decode_data_uri(source)
            logger.info("Decoded inline image, size: %d bytes", len(data))
            return data

        if not self._is_http_url(source):
            raise InvalidURLError(f"Not a fetchable image URL: {source!r}")

        logger.info("Downloading image from %s", source)
        response = await self._send("GET", source)
        if not response.is_success:
            raise ServerError(
                f"Image download failed with status {response.status_code}",
                response.status_code,
            )

        logger.info("Image downloaded, size: %d bytes", len(response.content))
        return response.content

    async def generate_image_with_data(
        self,
        prompt: str,
        user_id: str | None = None,
    ) -> tuple[ImageResult, bytes]:
        """Generate an image and fetch displayable bytes for it.

        Raises:
            DecodingError: The fetched bytes are not a recognizable image.
        """
        result = await self.generate_image(prompt, user_id=user_id)
        data = await self.download_image(result.image_url)
        if not looks_like_image(data):
            raise DecodingError("Downloaded payload is not a supported image format")
        return result, data

    async def _post_json(self, path: str, body: dict[str, Any], model: type[ResultT]) -> ResultT:
        """POST a JSON body and validate the JSON response against `model`."""
        url = self.config.endpoint(path)
        if not self._is_http_url(url):
            raise InvalidURLError(f"Invalid endpoint URL: {url!r}")

        if DEBUG:
            logger.debug("POST %s body=%r", url, body)

        started = time.monotonic()
        response = await self._send("POST", url, json=body)
        logger.info(
            "POST %s -> %d after %.2fs",
            path,
            response.status_code,
            time.monotonic() - started,
        )

        if not response.is_success:
            if DEBUG:
                logger.debug("Error body: %s", response.text)
            raise ServerError(
                f"{path} failed with status {response.status_code}",
                response.status_code,
            )

        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodingError(f"Unexpected {path} response shape") from exc

    async def _send(self, method: str, url: str, json: dict[str, Any] | None = None) -> httpx.Response:
        """Send one request under the per-call resource ceiling."""
        try:
            return await asyncio.wait_for(
                self._http.request(method, url, json=json),
                timeout=self.config.resource_timeout,
            )
        except httpx.InvalidURL as exc:
            raise InvalidURLError(f"Invalid URL: {url!r}") from exc
        except asyncio.TimeoutError as exc:
            raise httpx.TimeoutException(
                f"Resource timeout of {self.config.resource_timeout}s exceeded for {url}"
            ) from exc

    @staticmethod
    def _is_http_url(url: str) -> bool:
        """Return whether a URL is syntactically valid HTTP(S)."""
        try:
            parsed = urlparse(url)
        except ValueError:
            return False
        return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
