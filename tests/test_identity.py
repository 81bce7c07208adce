"""Tests for the anonymous device identifier."""

from __future__ import annotations

import uuid
from unittest.mock import patch

from aiassistant.identity import get_device_user_id


def test_identifier_is_created_and_persisted(tmp_path):
    path = tmp_path / "nested" / "device_id"

    with patch("aiassistant.identity.USER_ID_OVERRIDE", None):
        first = get_device_user_id(str(path))
        second = get_device_user_id(str(path))

    assert first == second
    assert uuid.UUID(first)
    assert path.read_text() == first


def test_existing_identifier_is_reused(tmp_path):
    path = tmp_path / "device_id"
    path.write_text("ABC-123\n")

    with patch("aiassistant.identity.USER_ID_OVERRIDE", None):
        assert get_device_user_id(str(path)) == "ABC-123"


def test_empty_file_is_replaced(tmp_path):
    path = tmp_path / "device_id"
    path.write_text("")

    with patch("aiassistant.identity.USER_ID_OVERRIDE", None):
        user_id = get_device_user_id(str(path))

    assert user_id
    assert path.read_text() == user_id


def test_environment_override_wins(tmp_path):
    with patch("aiassistant.identity.USER_ID_OVERRIDE", "from-env"):
        assert get_device_user_id(str(tmp_path / "device_id")) == "from-env"

    assert not (tmp_path / "device_id").exists()
