"""Model and mode catalogs shared by the client, codec, and adapters.

Architectural role:
    Defines the closed sets of backend identifiers a user can pick from. The raw
    enum values are the ids sent to the backend and embedded in wire URLs.

Lookup behavior:
    `from_id` helpers return `None` for unknown ids instead of falling back to a
    default model, so callers can refuse to mislabel a response's source.

Determinism:
    Pure lookup tables; no side effects.
"""

from __future__ import annotations

from enum import Enum


class GenerationModel(str, Enum):
    """Text-generation backends selectable for `/ask` requests."""

    CLAUDE = "claude"
    GPT4 = "gpt4"
    GEMINI = "gemini"
    PERPLEXITY = "perplexity"

    @property
    def display_name(self) -> str:
        return _TEXT_DISPLAY_NAMES[self]

    @property
    def icon(self) -> str:
        return _TEXT_ICONS[self]

    @classmethod
    def from_id(cls, raw: str | None) -> GenerationModel | None:
        """Resolve a raw id to a model, or `None` when the id is unknown."""
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


class ImageModel(str, Enum):
    """Image-generation backends selectable for `/generate-image` requests."""

    DALLE = "dalle"

    @property
    def display_name(self) -> str:
        return _IMAGE_DISPLAY_NAMES[self]

    @property
    def icon(self) -> str:
        return _IMAGE_ICONS[self]

    @classmethod
    def from_id(cls, raw: str | None) -> ImageModel | None:
        """Resolve a raw id to an image model, or `None` when unknown."""
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


class GenerationMode(str, Enum):
    """Whether a submitted prompt asks for text or for an image."""

    TEXT = "text"
    IMAGE = "image"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


_TEXT_DISPLAY_NAMES = {
    GenerationModel.CLAUDE: "Claude",
    GenerationModel.GPT4: "GPT-4",
    GenerationModel.GEMINI: "Gemini",
    GenerationModel.PERPLEXITY: "Perplexity",
}

_TEXT_ICONS = {
    GenerationModel.CLAUDE: "🤖",
    GenerationModel.GPT4: "💬",
    GenerationModel.GEMINI: "✨",
    GenerationModel.PERPLEXITY: "🔍",
}

_IMAGE_DISPLAY_NAMES = {
    ImageModel.DALLE: "DALL-E 3",
}

_IMAGE_ICONS = {
    ImageModel.DALLE: "🎨",
}
