"""Generation result contracts.

Architectural role:
    Immutable value objects produced by `aiassistant.client` and consumed by the
    session, the response codec, and the adapters.

Serialization:
    Field names on the backend wire are camelCase (`imageUrl`, `textResponse`);
    Python attributes are snake_case. Models accept either form on input and
    emit camelCase with `by_alias=True`.

Lifecycle:
    A result is created once per successful generation call and never mutated.
    `timestamp` is the capture time of the generation, not of encode/decode.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from aiassistant.models.catalog import GenerationModel, ImageModel


class ResponseType(str, Enum):
    """Discriminator for `EncodedResult` and for the wire URL `type` field."""

    TEXT = "text"
    IMAGE = "image"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Citation(_Frozen):
    """Source reference attached to a text answer."""

    title: str
    url: str
    snippet: str | None = None


class TextResult(_Frozen):
    """Answer returned by `POST /ask`.

    Attributes:
        text: Answer body, possibly markdown.
        citations: Sources in backend order. May be empty.
        model: Backend that produced the answer.
        timestamp: Epoch seconds at generation time.
    """

    text: str
    citations: list[Citation]
    model: GenerationModel
    timestamp: float


class ImageResult(_Frozen):
    """Image returned by `POST /generate-image`.

    `image_url` is either an ordinary HTTP(S) URL or an inline
    `data:image/...;base64,...` URI depending on the backend variant.
    """

    image_url: str = Field(alias="imageUrl")
    prompt: str
    model: ImageModel
    timestamp: float


class EncodedResult(BaseModel):
    """Reconstructed result for one opened message.

    Exactly one of `text_response` / `image_response` is set, matching `type`.
    `image_data` is never produced by the codec; it is filled by the message
    opener from the host attachment or a re-fetch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, ser_json_bytes="base64")

    type: ResponseType
    text_response: TextResult | None = Field(default=None, alias="textResponse")
    image_response: ImageResult | None = Field(default=None, alias="imageResponse")
    image_data: bytes | None = Field(default=None, alias="imageData")

    @classmethod
    def for_text(cls, result: TextResult) -> EncodedResult:
        return cls(type=ResponseType.TEXT, text_response=result)

    @classmethod
    def for_image(cls, result: ImageResult, image_data: bytes | None = None) -> EncodedResult:
        return cls(type=ResponseType.IMAGE, image_response=result, image_data=image_data)

    def with_image_data(self, image_data: bytes) -> EncodedResult:
        """Return a copy carrying displayable image bytes."""
        return self.model_copy(update={"image_data": image_data})
