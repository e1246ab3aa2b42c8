"""Custom exception hierarchy for reviewfeed."""

from __future__ import annotations


class ReviewFeedError(Exception):
    """Base class for all custom errors raised by reviewfeed."""


# --- Infrastructure errors ---

class InfrastructureError(ReviewFeedError):
    """Base class for infrastructure-level errors."""


class FetchTransportError(InfrastructureError):
    """Raised when the review provider cannot produce a page payload."""


class DecodeError(InfrastructureError):
    """Raised when a page payload is present but structurally invalid."""


class AvatarLoadError(InfrastructureError):
    """Raised when avatar bytes cannot be fetched or decoded."""


# --- Settings ---

class SettingsError(ReviewFeedError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
