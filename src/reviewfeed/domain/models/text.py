"""Plain styled text values shared by the row models and the layout code."""

from __future__ import annotations

from dataclasses import dataclass

from ... import config


@dataclass(frozen=True)
class TextStyle:
    """Font used to render a run of text."""

    point_size: float
    bold: bool = False
    family: str = config.FONT_FAMILY


@dataclass(frozen=True)
class StyledText:
    """Plain text paired with the style it is rendered in."""

    text: str
    style: TextStyle

    def is_empty(self) -> bool:
        return not self.text


BODY_STYLE = TextStyle(point_size=config.BODY_POINT_SIZE)
CREATED_STYLE = TextStyle(point_size=config.CREATED_POINT_SIZE)
NAME_STYLE = TextStyle(point_size=config.NAME_POINT_SIZE, bold=True)
SHOW_MORE_STYLE = TextStyle(point_size=config.SHOW_MORE_POINT_SIZE)
SUMMARY_STYLE = TextStyle(point_size=config.SUMMARY_POINT_SIZE)
