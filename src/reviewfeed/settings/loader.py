"""Load user settings for the review feed."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema.exceptions import ValidationError

from ..errors import SettingsLoadError, SettingsValidationError
from .schema import merge_with_defaults

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedSettings:
    page_size: int
    prefetch_screens: float
    collapsed_max_lines: int
    fixture_latency: tuple[float, float]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedSettings":
        low, high = data["fixture_latency"]
        return cls(
            page_size=data["page_size"],
            prefetch_screens=float(data["prefetch_screens"]),
            collapsed_max_lines=data["collapsed_max_lines"],
            fixture_latency=(float(low), float(high)),
        )


def load_settings(path: Path | None = None) -> FeedSettings:
    """Return settings from *path* merged over the defaults.

    A missing *path* (or ``None``) yields the defaults.
    """

    payload = None
    if path is not None and path.exists():
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SettingsLoadError(f"Cannot read settings {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise SettingsValidationError(f"Settings root must be an object: {path}")
    elif path is not None:
        LOGGER.debug("Settings file %s not found; using defaults", path)

    try:
        merged = merge_with_defaults(payload)
    except ValidationError as exc:
        raise SettingsValidationError(exc.message) from exc
    return FeedSettings.from_dict(merged)


__all__ = ["FeedSettings", "load_settings"]
