"""
Interactive CLI adapter for the AI assistant.

Architectural role:
- Stands in for the host extension UI in a terminal.
- Drives one `GenerationSession` and renders its state after each turn.
- Exposes the host "send" and "open" actions through local commands.

Request lifecycle (per user turn):
1. Read stdin without blocking the event loop.
2. Handle local control commands (`exit`/`quit`, `/mode`, `/model`, `/send`,
   `/open`, `/cancel`, `/help`).
3. Submit other text to the session in the active mode and await the result.
4. Print the answer, its citations, or the saved image path; or the error
   notice, keeping the draft for `/retry`.

Input validation behavior:
- Empty input is ignored.
- `/mode` and `/model` validate their argument against the catalogs.

Side effects:
- Network calls through `GenerationClient`.
- Writes the image attachment to the working directory on `/send`.
- Reads/creates the device identifier file.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import time

from aiassistant.client import GenerationClient
from aiassistant.config import LOG_LEVEL
from aiassistant.core.session import GenerationSession
from aiassistant.identity import get_device_user_id
from aiassistant.messages.composer import IncomingMessage, open_message
from aiassistant.models import EncodedResult, GenerationMode, GenerationModel, TextResult


logger = logging.getLogger(__name__)

HELP_TEXT = """
Commands:
 /mode text|image     switch generation mode
 /model <id>          switch text model ({models})
 /retry               resubmit the last question
 /cancel              cancel the pending generation
 /send                compose a message card for the current result
 /open <url>          reconstruct a result from a message link
 exit | quit          leave
"""


def render_text(result: TextResult) -> None:
    print(f"\n{result.model.icon} {result.model.display_name}\n")
    print(result.text)
    if result.citations:
        print("\nSources:")
        for index, citation in enumerate(result.citations, start=1):
            print(f" [{index}] {citation.title} - {citation.url}")
            if citation.snippet:
                print(f"     {citation.snippet}")


def render_opened(decoded: EncodedResult) -> None:
    if decoded.text_response is not None:
        render_text(decoded.text_response)
        return
    image = decoded.image_response
    print(f"\n{image.model.icon} {image.model.display_name} • \"{image.prompt}\"")
    if decoded.image_data:
        print(f"Image data: {len(decoded.image_data)} bytes")


def save_image(data: bytes, prefix: str = "generated") -> str:
    """Write image bytes next to the working directory and return the path."""
    path = os.path.abspath(f"{prefix}_{int(time.time())}.png")
    with open(path, "wb") as f:
        f.write(data)
    return path


def handle_command(session: GenerationSession, command: str) -> bool:
    """Apply a synchronous local command. Returns `False` when not handled."""
    parts = command.split()
    name = parts[0].lower()

    if name == "/help":
        models = ", ".join(m.value for m in GenerationModel)
        print(HELP_TEXT.format(models=models))
        return True

    if name == "/mode":
        if len(parts) < 2 or parts[1].lower() not in {m.value for m in GenerationMode}:
            print(f"\nCurrent mode: {session.mode.value}. Usage: /mode text|image\n")
            return True
        session.mode = GenerationMode(parts[1].lower())
        print(f"\nSwitched to {session.mode.display_name} mode.\n")
        return True

    if name == "/model":
        model = GenerationModel.from_id(parts[1].lower()) if len(parts) > 1 else None
        if model is None:
            print(f"\nUnknown model. Current model: {session.text_model.value}\n")
            return True
        session.text_model = model
        print(f"\nSwitched to {model.display_name}.\n")
        return True

    if name == "/cancel":
        if session.cancel():
            print("\nGeneration cancelled.\n")
        else:
            print("\nNothing to cancel.\n")
        return True

    if name == "/send":
        message = session.compose_outgoing()
        if message is None:
            print("\nNothing to send yet.\n")
            return True
        print(f"\nCaption: {message.caption}")
        if message.preview:
            print(f"Preview: {message.preview}")
        if message.image:
            print(f"Attachment: {save_image(message.image)}")
        print(f"Link: {message.url}\n")
        return True

    return False


async def run_turn(session: GenerationSession, question: str) -> None:
    """Submit one question and render the outcome."""
    task = session.submit(question)
    print("\nGenerating...\n")
    try:
        await task
    except asyncio.CancelledError:
        print("Generation cancelled.")
        return

    if session.error_message:
        print(session.error_message)
    elif session.text_response is not None:
        render_text(session.text_response)
    elif session.image_response is not None:
        print(f"Image ready ({len(session.image_data or b'')} bytes). Use /send to share it.")


async def run(client: GenerationClient | None = None) -> None:
    """Run the interactive loop until `exit`, EOF, or interrupt."""
    own_client = client is None
    client = client or GenerationClient()
    session = GenerationSession(client, user_id=get_device_user_id())

    print("AI Assistant started. (Type '/help' for commands, 'exit' to quit)")
    print(f"Mode: {session.mode.display_name} | Model: {session.text_model.display_name}\n")
    print("-" * 60)

    try:
        while True:
            try:
                line = (await asyncio.to_thread(input, "Question: ")).strip()
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print("\nInterrupted.")
                break

            if not line:
                continue

            if line.lower() in ("exit", "quit"):
                print("Shutting down.")
                break

            if line.lower().startswith("/open"):
                parts = line.split(maxsplit=1)
                if len(parts) < 2:
                    print("\nUsage: /open <url>\n")
                    continue
                decoded = open_message(IncomingMessage(url=parts[1]))
                if decoded is None:
                    print("\nCould not open that link.\n")
                else:
                    render_opened(decoded)
                continue

            if line.lower() == "/retry":
                if not session.draft:
                    print("\nNothing to retry.\n")
                    continue
                line = session.draft
            elif line.startswith("/"):
                if not handle_command(session, line):
                    print("\nUnknown command. Type /help.\n")
                continue

            await run_turn(session, line)
            print("\n" + "-" * 60 + "\n")
    finally:
        session.cancel()
        if own_client:
            await client.aclose()


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if hasattr(sys.stdout, "reconfigure"):
        try:
            sys.stdout.reconfigure(encoding="utf-8", errors="ignore")
        except (OSError, ValueError):
            pass

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        print("\nInterrupted.")


if __name__ == "__main__":
    main()
