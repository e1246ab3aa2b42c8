"""Schema helpers for the review feed settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from .. import config

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "reviewfeed/settings.schema.json",
    "type": "object",
    "required": ["schema", "page_size", "prefetch_screens", "collapsed_max_lines"],
    "properties": {
        "schema": {"const": "reviewfeed/settings@1"},
        "page_size": {"type": "integer", "minimum": 1},
        "prefetch_screens": {"type": "number", "exclusiveMinimum": 0},
        "collapsed_max_lines": {"type": "integer", "minimum": 0},
        "fixture_latency": {
            "type": "array",
            "items": {"type": "number", "minimum": 0},
            "minItems": 2,
            "maxItems": 2,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "reviewfeed/settings@1",
    "page_size": config.DEFAULT_PAGE_SIZE,
    "prefetch_screens": config.PREFETCH_SCREENS,
    "collapsed_max_lines": config.COLLAPSED_MAX_LINES,
    "fixture_latency": list(config.FIXTURE_LATENCY_SEC),
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        merged.update(data)
    _validator.validate(merged)
    return merged


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults"]
