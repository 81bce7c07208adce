"""
HTTP API adapter for the message link codec.

Architectural role:
- Serves the wire-URL host so message links resolve outside the host app.
- Exposes the model catalog and outgoing-card composition to web clients.
- Delegates all encoding/decoding to `aiassistant.messages`.

Endpoint responsibilities:
- `GET /v1/models`: list text and image models.
- `GET /response`: decode a wire-URL query into the JSON result.
- `POST /v1/messages`: build an outgoing card (caption, preview, link).

Input validation behavior:
- Undecodable links -> HTTP 404.
- Unknown card `type` or invalid result payload -> HTTP 400.

Response formatting:
- Results use the backend camelCase field names.
- Decoded image results carry the placeholder image URL; pixels are not
  recoverable from a link alone.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from aiassistant.config import DEBUG, WIRE_PATH
from aiassistant.messages import codec
from aiassistant.messages.composer import compose_text_message, image_caption
from aiassistant.models import GenerationModel, ImageModel, ImageResult, ResponseType, TextResult


logger = logging.getLogger(__name__)

app = FastAPI()


class MessageRequest(BaseModel):
    """Card composition request: a result tagged with its type."""

    type: str
    result: dict[str, Any]


@app.get("/v1/models")
def list_models():
    """Return the text and image model catalogs."""
    return {
        "text": [
            {"id": m.value, "displayName": m.display_name, "icon": m.icon}
            for m in GenerationModel
        ],
        "image": [
            {"id": m.value, "displayName": m.display_name, "icon": m.icon}
            for m in ImageModel
        ],
    }


@app.get(WIRE_PATH)
def resolve_response(request: Request):
    """Decode a message link query string into its result."""
    decoded = codec.decode_query(request.url.query)

    if DEBUG:
        logger.debug("Decoded link query=%r -> %r", request.url.query, decoded)

    if decoded is None:
        return JSONResponse(status_code=404, content={"error": "Unrecognized response link"})

    return decoded.model_dump(mode="json", by_alias=True, exclude_none=True)


@app.post("/v1/messages")
def compose_message(body: MessageRequest):
    """
    Build an outgoing card for a text or image result.

    Image cards carry no attachment here; the caller attaches the pixels it
    already holds.
    """
    try:
        if body.type == ResponseType.TEXT.value:
            message = compose_text_message(TextResult.model_validate(body.result))
            return {"caption": message.caption, "url": message.url, "preview": message.preview}

        if body.type == ResponseType.IMAGE.value:
            result = ImageResult.model_validate(body.result)
            return {"caption": image_caption(result), "url": codec.encode(result), "preview": ""}
    except ValidationError as exc:
        logger.info("Rejected card request: %s", exc.error_count())
        return JSONResponse(status_code=400, content={"error": "Invalid result payload"})

    return JSONResponse(status_code=400, content={"error": "Unknown result type"})
