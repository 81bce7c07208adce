"""Shared data contracts.

Module split:
    - `catalog`: text/image model identifiers and generation modes.
    - `responses`: citation, text/image results, and the decoded message union.
"""

from aiassistant.models.catalog import GenerationMode, GenerationModel, ImageModel
from aiassistant.models.responses import (
    Citation,
    EncodedResult,
    ImageResult,
    ResponseType,
    TextResult,
)

__all__ = [
    "Citation",
    "EncodedResult",
    "GenerationMode",
    "GenerationModel",
    "ImageModel",
    "ImageResult",
    "ResponseType",
    "TextResult",
]
