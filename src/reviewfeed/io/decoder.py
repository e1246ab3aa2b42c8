"""Decode provider payloads into :class:`ReviewPage` objects."""

from __future__ import annotations

import json
import logging
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ..domain.models.review import ReviewPage, ReviewRecord
from ..errors import DecodeError

LOGGER = logging.getLogger(__name__)

REVIEW_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["text", "created", "first_name", "last_name", "rating"],
    "properties": {
        "text": {"type": "string"},
        "created": {"type": "string"},
        "first_name": {"type": "string"},
        "last_name": {"type": "string"},
        "rating": {"type": "integer"},
        "avatar_url": {"type": ["string", "null"]},
    },
    "additionalProperties": True,
}

PAGE_SCHEMA: dict[str, Any] = {
    "$id": "reviewfeed/page.schema.json",
    "type": "object",
    "required": ["items", "count"],
    "properties": {
        "items": {"type": "array", "items": REVIEW_SCHEMA},
        "count": {"type": "integer", "minimum": 0},
    },
    "additionalProperties": True,
}

_validator = Draft202012Validator(PAGE_SCHEMA)


def decode_page(data: bytes) -> ReviewPage:
    """Decode *data* into a page, rejecting the whole page on any defect."""

    try:
        payload = json.loads(data)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Malformed page payload: {exc}") from exc

    try:
        _validator.validate(payload)
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise DecodeError(f"Invalid page payload at {location}: {exc.message}") from exc

    items = tuple(ReviewRecord.from_dict(item) for item in payload["items"])
    LOGGER.debug("Decoded %d reviews (reported total %d)", len(items), payload["count"])
    return ReviewPage(items=items, count=int(payload["count"]))


__all__ = ["PAGE_SCHEMA", "decode_page"]
