"""Interactive generation session with last-request-wins semantics.

Architectural role:
    Owns the state an interactive surface (CLI, host extension UI) renders:
    the preserved draft, the selected mode/models, the latest result, and the
    error notice. Sits between adapters and `aiassistant.client`.

Control-flow model:
    1. `submit` validates the draft and cancels any pending generation.
    2. A new task is created and atomically stored as the single pending handle.
    3. The task runs the client call(s) on the event loop without blocking it.
    4. On completion the outcome is applied only if the task is still the
       pending handle; cancelled or superseded tasks never touch state.

Error handling strategy:
    Any generation failure becomes the generic, retry-eligible notice
    `GENERIC_ERROR_MESSAGE`. The draft is kept so the user can resubmit
    without retyping. No automatic retry is performed.

Side effects:
    - Network calls through the injected `GenerationClient`.
    - `on_change` callback after every state transition.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from aiassistant.client import GenerationClient
from aiassistant.messages.composer import (
    OutgoingMessage,
    compose_image_message,
    compose_text_message,
)
from aiassistant.models import (
    GenerationMode,
    GenerationModel,
    ImageModel,
    ImageResult,
    TextResult,
)


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Couldn't get a response. Please try again."


class GenerationSession:
    """Single-slot generation controller for one interactive session.

    Args:
        client: Backend client used for every generation call.
        user_id: Anonymous device identifier forwarded as `userId`.
        mode: Initial generation mode.
        text_model: Initial text backend.
        image_model: Image backend shown on image results.
        on_change: Optional callback invoked with the session after each
            state transition.
    """

    def __init__(
        self,
        client: GenerationClient,
        user_id: str | None = None,
        mode: GenerationMode = GenerationMode.TEXT,
        text_model: GenerationModel = GenerationModel.CLAUDE,
        image_model: ImageModel = ImageModel.DALLE,
        on_change: Callable[[GenerationSession], Any] | None = None,
    ) -> None:
        self.client = client
        self.user_id = user_id
        self.mode = mode
        self.text_model = text_model
        self.image_model = image_model
        self.on_change = on_change

        self.draft = ""
        self.is_generating = False
        self.error_message: str | None = None
        self.text_response: TextResult | None = None
        self.image_response: ImageResult | None = None
        self.image_data: bytes | None = None

        self._pending: asyncio.Task | None = None

    @property
    def pending(self) -> asyncio.Task | None:
        return self._pending

    def submit(
        self,
        question: str,
        mode: GenerationMode | None = None,
        text_model: GenerationModel | None = None,
    ) -> asyncio.Task:
        """Start a generation, superseding any pending one.

        Must be called from a running event loop.

        Args:
            question: Prompt text; must contain non-whitespace characters.
            mode: Optional mode override, persisted on the session.
            text_model: Optional text backend override, persisted on the session.

        Returns:
            The task now held as the pending handle. Awaiting it yields the
            result (or `None` on failure); it raises `CancelledError` if it is
            superseded or cancelled.

        Raises:
            ValueError: Empty question.
        """
        if not question or not question.strip():
            raise ValueError("Question must not be empty")

        if mode is not None:
            self.mode = mode
        if text_model is not None:
            self.text_model = text_model

        self._cancel_pending()

        self.draft = question
        self.error_message = None
        self.is_generating = True

        if self.mode is GenerationMode.IMAGE:
            coroutine = self._generate_image(question)
        else:
            coroutine = self._generate_text(question, self.text_model)

        task = asyncio.get_running_loop().create_task(coroutine)
        self._pending = task
        logger.info("Started %s generation", self.mode.value)
        self._notify()
        return task

    def cancel(self) -> bool:
        """Cancel the pending generation. Returns `True` if one was running."""
        if not self._cancel_pending():
            return False
        self.is_generating = False
        self._notify()
        return True

    def dismiss_error(self) -> None:
        self.error_message = None
        self._notify()

    def compose_outgoing(self) -> OutgoingMessage | None:
        """Build the card for the current result and clear it.

        Returns:
            Message for the host runtime, or `None` when there is nothing to send.
        """
        if self.text_response is not None:
            message = compose_text_message(self.text_response)
            self.text_response = None
        elif self.image_response is not None and self.image_data is not None:
            message = compose_image_message(self.image_response, self.image_data)
            self.image_response = None
            self.image_data = None
        else:
            return None

        self._notify()
        return message

    async def _generate_text(self, question: str, model: GenerationModel) -> TextResult | None:
        task = asyncio.current_task()
        try:
            result = await self.client.ask_text(question, model, user_id=self.user_id)
        except Exception:
            logger.exception("Text generation failed")
            self._apply_failure(task)
            return None

        if self._is_current(task):
            self.text_response = result
            self.image_response = None
            self.image_data = None
            self._finish()
        return result

    async def _generate_image(self, prompt: str) -> ImageResult | None:
        task = asyncio.current_task()
        try:
            result, data = await self.client.generate_image_with_data(prompt, user_id=self.user_id)
        except Exception:
            logger.exception("Image generation failed")
            self._apply_failure(task)
            return None

        if self._is_current(task):
            self.image_response = result
            self.image_data = data
            self.image_model = result.model
            self.text_response = None
            self._finish()
        return result

    def _apply_failure(self, task: asyncio.Task | None) -> None:
        if not self._is_current(task):
            return
        self.error_message = GENERIC_ERROR_MESSAGE
        self._finish()

    def _finish(self) -> None:
        self.is_generating = False
        self._pending = None
        self._notify()

    def _is_current(self, task: asyncio.Task | None) -> bool:
        return task is not None and task is self._pending

    def _cancel_pending(self) -> bool:
        task = self._pending
        self._pending = None
        if task is None or task.done():
            return False
        task.cancel()
        logger.info("Cancelled pending generation")
        return True

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
