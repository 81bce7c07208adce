"""Outgoing message cards and reconstruction of opened messages.

Architectural role:
    Narrow boundary to the host messaging runtime. The host accepts an
    `OutgoingMessage` (caption, preview, optional image attachment, wire URL)
    and later hands back an `IncomingMessage` when the user taps it.

Image reconstruction:
    The wire URL never carries pixels or the image URL. `open_message` takes
    image bytes from the host attachment and otherwise gives up (returns
    `None`) instead of guessing.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from aiassistant.messages import codec
from aiassistant.models import EncodedResult, ImageResult, ResponseType, TextResult


logger = logging.getLogger(__name__)

PREVIEW_MAX_CHARS = 280
ELLIPSIS = "..."

_MARKDOWN_MARKERS = re.compile(r"#{1,3} ?|\*\*|__|\*|_")


@dataclass(frozen=True)
class OutgoingMessage:
    """Rich message card handed to the host runtime.

    Attributes:
        caption: One-line card caption.
        url: Wire URL reconstructing the result on open.
        preview: Plain-text card body (empty for image cards).
        image: Attachment bytes for image cards.
    """

    caption: str
    url: str
    preview: str = ""
    image: bytes | None = None


@dataclass(frozen=True)
class IncomingMessage:
    """Message selected by the user in the host conversation."""

    url: str | None
    attachment: bytes | None = None


def text_caption(result: TextResult) -> str:
    count = len(result.citations)
    noun = "source" if count == 1 else "sources"
    return f"{result.model.display_name} • {count} {noun}"


def image_caption(result: ImageResult) -> str:
    return f"{result.model.display_name} • Generated Image"


def preview_text(text: str, max_chars: int = PREVIEW_MAX_CHARS) -> str:
    """Strip markdown emphasis/heading markers and fit `text` into `max_chars`.

    Truncation drops ten characters at a time and appends an ellipsis, so
    the result is always at most `max_chars` long.
    """
    plain = _MARKDOWN_MARKERS.sub("", text)
    if len(plain) <= max_chars:
        return plain

    truncated = plain
    while truncated:
        truncated = truncated[:-10]
        candidate = truncated.rstrip() + ELLIPSIS
        if len(candidate) <= max_chars:
            return candidate
    return ELLIPSIS


def compose_text_message(result: TextResult) -> OutgoingMessage:
    return OutgoingMessage(
        caption=text_caption(result),
        url=codec.encode(result),
        preview=preview_text(result.text),
    )


def compose_image_message(result: ImageResult, image: bytes) -> OutgoingMessage:
    """Build an image card; `image` travels as the host attachment."""
    return OutgoingMessage(
        caption=image_caption(result),
        url=codec.encode(result),
        image=image,
    )


def open_message(message: IncomingMessage) -> EncodedResult | None:
    """Reconstruct the result carried by a tapped message.

    Args:
        message: Message handed over by the host.

    Returns:
        Displayable `EncodedResult`, or `None` when the URL does not decode or
        an image message has no recoverable pixels.
    """
    if not message.url:
        return None

    decoded = codec.decode(message.url)
    if decoded is None:
        logger.info("Message URL did not decode")
        return None

    if decoded.type is ResponseType.TEXT:
        return decoded

    if message.attachment:
        return decoded.with_image_data(message.attachment)

    logger.info("No image data available for opened message")
    return None
