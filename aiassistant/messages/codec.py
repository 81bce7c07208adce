"""Wire-URL codec for results attached to outgoing messages.

Architectural role:
    Converts a `TextResult` / `ImageResult` into a compact URL that travels with
    a host message, and reconstructs an `EncodedResult` when that message is
    opened.

Wire format:
    `https://aiassistant.app/response?type=<text|image>&...`
    - text: `text`, `model`, `citations` (base64 of a JSON citation array,
      omitted when empty), `timestamp`
    - image: `prompt`, `model`, `timestamp`; image bytes and the image URL are
      never encoded, pixels travel as the host message attachment.

Decoding policy:
    - `decode` never raises; every failure yields `None`.
    - Unknown model ids fail the decode (no fallback model).
    - A corrupt `citations` payload degrades to an empty citation list.
    - A missing or unparsable `timestamp` defaults to the decode time.
    - A literal `+` in the query is a plus sign, not a space.

Determinism:
    `encode` is deterministic. `decode` is deterministic except for the
    timestamp default.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import math
import re
import time
from urllib.parse import quote, unquote, urlencode, urlsplit, urlunsplit

from pydantic import TypeAdapter, ValidationError

from aiassistant.config import PLACEHOLDER_IMAGE_URL, WIRE_HOST, WIRE_PATH, WIRE_SCHEME
from aiassistant.models import (
    Citation,
    EncodedResult,
    GenerationModel,
    ImageModel,
    ImageResult,
    ResponseType,
    TextResult,
)


logger = logging.getLogger(__name__)

_CITATIONS = TypeAdapter(list[Citation])

_TIMESTAMP = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def encode(result: TextResult | ImageResult) -> str:
    """Encode a generation result as a wire URL.

    Args:
        result: Text or image result to attach to a message.

    Returns:
        Absolute URL string.

    Raises:
        TypeError: `result` is neither a `TextResult` nor an `ImageResult`.
    """
    if isinstance(result, TextResult):
        items = [
            ("type", ResponseType.TEXT.value),
            ("text", result.text),
            ("model", result.model.value),
        ]
        if result.citations:
            items.append(("citations", _encode_citations(result.citations)))
        items.append(("timestamp", _format_timestamp(result.timestamp)))
    elif isinstance(result, ImageResult):
        items = [
            ("type", ResponseType.IMAGE.value),
            ("prompt", result.prompt),
            ("model", result.model.value),
            ("timestamp", _format_timestamp(result.timestamp)),
        ]
    else:
        raise TypeError(f"Cannot encode {type(result).__name__}")

    query = urlencode(items, quote_via=quote)
    return urlunsplit((WIRE_SCHEME, WIRE_HOST, WIRE_PATH, query, ""))


def decode(url: str) -> EncodedResult | None:
    """Reconstruct a result from a wire URL, or `None` when it is not one."""
    try:
        query = urlsplit(url).query
    except (AttributeError, TypeError, ValueError):
        return None
    return decode_query(query)


def decode_query(query: str) -> EncodedResult | None:
    """Reconstruct a result from a raw wire-URL query string."""
    pairs = _split_query(query)

    response_type = next((value for name, value in pairs if name == "type"), None)
    if response_type is None:
        logger.debug("Wire URL has no type field")
        return None

    fields = dict(pairs)

    if response_type == ResponseType.TEXT.value:
        return _decode_text(fields)
    if response_type == ResponseType.IMAGE.value:
        return _decode_image(fields)

    logger.debug("Unsupported wire URL type: %r", response_type)
    return None


def _split_query(query: str) -> list[tuple[str, str]]:
    """Split a query into decoded pairs. `+` is a literal plus, not a space."""
    pairs = []
    for item in query.split("&"):
        if not item:
            continue
        name, _, value = item.partition("=")
        pairs.append((unquote(name), unquote(value)))
    return pairs


def _decode_text(fields: dict[str, str]) -> EncodedResult | None:
    text = fields.get("text")
    model = GenerationModel.from_id(fields.get("model"))
    if text is None or model is None:
        return None

    result = TextResult(
        text=text,
        citations=_decode_citations(fields.get("citations")),
        model=model,
        timestamp=_parse_timestamp(fields.get("timestamp")),
    )
    return EncodedResult.for_text(result)


def _decode_image(fields: dict[str, str]) -> EncodedResult | None:
    prompt = fields.get("prompt")
    model = ImageModel.from_id(fields.get("model"))
    if prompt is None or model is None:
        return None

    result = ImageResult(
        image_url=PLACEHOLDER_IMAGE_URL,
        prompt=prompt,
        model=model,
        timestamp=_parse_timestamp(fields.get("timestamp")),
    )
    return EncodedResult.for_image(result)


def _encode_citations(citations: list[Citation]) -> str:
    payload = json.dumps(
        [citation.model_dump(exclude_none=True) for citation in citations],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def _decode_citations(raw: str | None) -> list[Citation]:
    """Decode the citations field; any failure means "no citations shown"."""
    if not raw:
        return []
    try:
        payload = base64.b64decode(raw, validate=True)
        return _CITATIONS.validate_json(payload)
    except (binascii.Error, ValueError, ValidationError):
        logger.warning("Ignoring undecodable citations payload")
        return []


def _format_timestamp(timestamp: float) -> str:
    return repr(float(timestamp))


def _parse_timestamp(raw: str | None) -> float:
    if raw is not None and _TIMESTAMP.fullmatch(raw):
        value = float(raw)
        if math.isfinite(value):
            return value
    return time.time()
