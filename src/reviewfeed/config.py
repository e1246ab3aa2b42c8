"""Default configuration values for reviewfeed."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

DEFAULT_PAGE_SIZE: Final[int] = 20

# A new page is requested once fewer than this many viewport heights of
# content remain below the projected scroll position.
PREFETCH_SCREENS: Final[float] = 2.5

# Number of body text lines shown before a row is expanded.  ``0`` means the
# text is not capped.
COLLAPSED_MAX_LINES: Final[int] = 3
UNLIMITED_LINES: Final[int] = 0

FIXTURE_LATENCY_SEC: Final[tuple[float, float]] = (0.1, 1.0)

# ---------------------------------------------------------------------------
# Review row geometry (points)
# ---------------------------------------------------------------------------

ROW_INSET_TOP: Final[float] = 9.0
ROW_INSET_LEFT: Final[float] = 12.0
ROW_INSET_BOTTOM: Final[float] = 9.0
ROW_INSET_RIGHT: Final[float] = 12.0

AVATAR_SIZE: Final[float] = 36.0

AVATAR_TO_NAME_SPACING: Final[float] = 10.0
NAME_TO_RATING_SPACING: Final[float] = 6.0
RATING_TO_TEXT_SPACING: Final[float] = 6.0
TEXT_TO_CREATED_SPACING: Final[float] = 6.0
SHOW_MORE_TO_CREATED_SPACING: Final[float] = 6.0

# Rating glyphs: five square stars with a one point gap.
STAR_SIZE: Final[float] = 16.0
STAR_SPACING: Final[float] = 1.0
RATING_RANGE: Final[tuple[int, int]] = (1, 5)

# ---------------------------------------------------------------------------
# Summary row
# ---------------------------------------------------------------------------

SUMMARY_HORIZONTAL_PADDING: Final[float] = 12.0
SUMMARY_VERTICAL_PADDING: Final[float] = 20.0
SUMMARY_MIN_HEIGHT: Final[float] = 44.0
SUMMARY_TEMPLATE: Final[str] = "Total reviews: {count}"

# ---------------------------------------------------------------------------
# Typography
# ---------------------------------------------------------------------------

FONT_FAMILY: Final[str] = "Open Sans"

BODY_POINT_SIZE: Final[float] = 12.0
CREATED_POINT_SIZE: Final[float] = 10.0
NAME_POINT_SIZE: Final[float] = 16.0
SHOW_MORE_POINT_SIZE: Final[float] = 12.0
SUMMARY_POINT_SIZE: Final[float] = 14.0

STAR_FILLED_COLOR: Final[str] = "#ff9f0a"
STAR_EMPTY_COLOR: Final[str] = "#d1d1d6"

SHOW_MORE_TEXT: Final[str] = "Show full review..."
