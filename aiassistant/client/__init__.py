"""Backend access package.

Module split:
    - `client`: async HTTP transport and response materialization.
    - `errors`: client error taxonomy.
"""

from aiassistant.client.client import GenerationClient, decode_data_uri, looks_like_image
from aiassistant.client.errors import (
    AssistantAPIError,
    DecodingError,
    InvalidURLError,
    ServerError,
)

__all__ = [
    "AssistantAPIError",
    "DecodingError",
    "GenerationClient",
    "InvalidURLError",
    "ServerError",
    "decode_data_uri",
    "looks_like_image",
]
