"""Tests for the interactive CLI adapter's local commands and turn rendering."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from aiassistant.api.cli import handle_command, run_turn
from aiassistant.client import ServerError
from aiassistant.core.session import GENERIC_ERROR_MESSAGE, GenerationSession
from aiassistant.models import GenerationMode, GenerationModel

from .conftest import make_text_result


@pytest.fixture
def session():
    return GenerationSession(AsyncMock(), user_id="device-1")


def test_mode_command_switches_mode(session, capsys):
    assert handle_command(session, "/mode image") is True

    assert session.mode is GenerationMode.IMAGE
    assert "Image mode" in capsys.readouterr().out


def test_mode_command_rejects_unknown_mode(session):
    handle_command(session, "/mode video")

    assert session.mode is GenerationMode.TEXT


def test_model_command_switches_text_model(session):
    handle_command(session, "/model gemini")

    assert session.text_model is GenerationModel.GEMINI


def test_model_command_keeps_model_on_unknown_id(session, capsys):
    handle_command(session, "/model gpt5")

    assert session.text_model is GenerationModel.CLAUDE
    assert "Unknown model" in capsys.readouterr().out


def test_send_without_result(session, capsys):
    handle_command(session, "/send")

    assert "Nothing to send" in capsys.readouterr().out


def test_cancel_command_reports_nothing_pending(session, capsys):
    assert handle_command(session, "/cancel") is True

    out = capsys.readouterr().out
    assert "Nothing to cancel" in out
    assert "Generation cancelled" not in out


def test_unknown_command_is_not_handled(session):
    assert handle_command(session, "/dance") is False


@pytest.mark.asyncio
async def test_run_turn_renders_answer_and_send_prints_link(session, capsys):
    session.client.ask_text.return_value = make_text_result()

    await run_turn(session, "capital of France?")
    handle_command(session, "/send")

    out = capsys.readouterr().out
    assert "Paris is the capital of France." in out
    assert "[1] Paris - https://en.wikipedia.org/wiki/Paris" in out
    assert "Caption: Perplexity • 2 sources" in out
    assert "Link: https://aiassistant.app/response?type=text" in out


@pytest.mark.asyncio
async def test_run_turn_prints_error_notice(session, capsys):
    session.client.ask_text.side_effect = ServerError("boom", 500)

    await run_turn(session, "q")

    assert GENERIC_ERROR_MESSAGE in capsys.readouterr().out
    assert session.draft == "q"
