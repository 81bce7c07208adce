"""Runtime configuration for the generation client, codec, and adapters.

Architectural role:
    Centralizes backend endpoint selection, timeouts, wire-URL constants, and
    device-identity storage for `aiassistant.client`, `aiassistant.messages`,
    and `aiassistant.identity`.

Determinism:
    Values are resolved at import time from the process environment (after
    `load_dotenv()`), so they are fixed for the lifetime of the process.

Relevant environment variables:
    - `AIASSISTANT_API_BASE_URL`
    - `AIASSISTANT_REQUEST_TIMEOUT`
    - `AIASSISTANT_RESOURCE_TIMEOUT`
    - `AIASSISTANT_USER_ID`
    - `AIASSISTANT_USER_ID_FILE`
    - `LOG_LEVEL`
    - `DEBUG`
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_BASE_URL = "https://6w3udv8wz9.execute-api.us-east-1.amazonaws.com/api"

# Endpoint paths appended to the base URL.
ASK_PATH = "/ask"
GENERATE_IMAGE_PATH = "/generate-image"

# Wire URL attached to outgoing messages.
WIRE_SCHEME = "https"
WIRE_HOST = "aiassistant.app"
WIRE_PATH = "/response"

# Stand-in image URL for decoded image messages; pixels come from the host attachment.
PLACEHOLDER_IMAGE_URL = "mock://placeholder"

USER_ID_OVERRIDE = os.getenv("AIASSISTANT_USER_ID") or None
USER_ID_FILE = os.path.expanduser(
    os.getenv("AIASSISTANT_USER_ID_FILE", "~/.aiassistant/device_id")
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
# Request/response body logging is opt-in.
DEBUG = os.getenv("DEBUG") == "true"


@dataclass(frozen=True)
class ClientConfig:
    """Network configuration for `GenerationClient`.

    Attributes:
        base_url: Backend root; `/ask` and `/generate-image` are appended.
        request_timeout: Seconds allowed for each transport operation.
        resource_timeout: Hard ceiling in seconds for one whole call.
    """

    base_url: str = os.getenv("AIASSISTANT_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")
    request_timeout: float = float(os.getenv("AIASSISTANT_REQUEST_TIMEOUT", "60"))
    resource_timeout: float = float(os.getenv("AIASSISTANT_RESOURCE_TIMEOUT", "120"))

    def endpoint(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"
