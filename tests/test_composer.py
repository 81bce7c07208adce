"""Tests for outgoing message cards and reconstruction of opened messages."""

from __future__ import annotations

import pytest

from aiassistant.messages import codec
from aiassistant.messages.composer import (
    IncomingMessage,
    compose_image_message,
    compose_text_message,
    image_caption,
    open_message,
    preview_text,
    text_caption,
)
from aiassistant.models import Citation, ResponseType

from .conftest import PNG_BYTES, make_text_result


class TestCaptions:

    @pytest.mark.parametrize(
        "count, expected",
        [
            (0, "Perplexity • 0 sources"),
            (1, "Perplexity • 1 source"),
            (3, "Perplexity • 3 sources"),
        ],
    )
    def test_text_caption_pluralizes(self, count, expected):
        citations = [Citation(title=f"t{i}", url=f"https://s{i}.test") for i in range(count)]

        assert text_caption(make_text_result(citations=citations)) == expected

    def test_image_caption(self, image_result):
        assert image_caption(image_result) == "DALL-E 3 • Generated Image"


class TestPreview:

    def test_strips_markdown_markers(self):
        text = "## Summary\n**Paris** is the _capital_ of *France*."

        assert preview_text(text) == "Summary\nParis is the capital of France."

    def test_short_text_is_unchanged(self):
        assert preview_text("plain answer") == "plain answer"

    def test_long_text_is_truncated_with_ellipsis(self):
        preview = preview_text("word " * 200, max_chars=50)

        assert len(preview) <= 50
        assert preview.endswith("...")
        assert preview.startswith("word word")


class TestCompose:

    def test_text_card(self, text_result):
        message = compose_text_message(text_result)

        assert message.caption == "Perplexity • 2 sources"
        assert message.image is None
        assert message.preview == text_result.text
        assert codec.decode(message.url).text_response == text_result

    def test_image_card_carries_attachment(self, image_result):
        message = compose_image_message(image_result, PNG_BYTES)

        assert message.image == PNG_BYTES
        assert message.preview == ""
        assert codec.decode(message.url).type is ResponseType.IMAGE


class TestOpenMessage:

    def test_text_message_opens(self, text_result):
        decoded = open_message(IncomingMessage(url=codec.encode(text_result)))

        assert decoded.text_response == text_result

    def test_image_message_uses_host_attachment(self, image_result):
        message = IncomingMessage(url=codec.encode(image_result), attachment=PNG_BYTES)

        decoded = open_message(message)

        assert decoded.image_data == PNG_BYTES
        assert decoded.image_response.prompt == image_result.prompt

    def test_image_message_without_attachment_is_unrecoverable(self, image_result):
        assert open_message(IncomingMessage(url=codec.encode(image_result))) is None

    def test_undecodable_or_missing_url_returns_none(self):
        assert open_message(IncomingMessage(url=None)) is None
        assert open_message(IncomingMessage(url="https://example.com/other")) is None
