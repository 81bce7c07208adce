"""Anonymous device-scoped user identifier.

The identifier is sent as `userId` with every generation call. It is a random
UUID4 created on first use and persisted to `USER_ID_FILE`, so it stays
stable per device without identifying the person.

Resolution order:
    1. `AIASSISTANT_USER_ID` environment override.
    2. Contents of the id file.
    3. Freshly generated UUID, written to the id file.
"""

from __future__ import annotations

import logging
import os
import uuid

from aiassistant.config import USER_ID_FILE, USER_ID_OVERRIDE


logger = logging.getLogger(__name__)


def get_device_user_id(path: str | None = None) -> str:
    """Return the persisted device identifier, creating it when missing.

    Args:
        path: Id file location; defaults to `USER_ID_FILE`.

    Edge cases:
        - An unreadable or empty file is replaced with a new identifier.
        - If the file cannot be written, the new identifier is still returned
          but will not survive the process.
    """
    if USER_ID_OVERRIDE:
        return USER_ID_OVERRIDE

    path = path or USER_ID_FILE

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                stored = f.read().strip()
        except OSError:
            logger.exception("Failed to read device id from %s", path)
            stored = ""
        if stored:
            return stored

    user_id = str(uuid.uuid4()).upper()
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w") as f:
            f.write(user_id)
    except OSError:
        logger.exception("Failed to persist device id to %s", path)
    return user_id
