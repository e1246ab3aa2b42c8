"""Domain models for the review feed."""

from .review import ReviewPage, ReviewRecord
from .rows import ListState, RowModel, SummaryRow
from .text import StyledText, TextStyle

__all__ = [
    "ListState",
    "ReviewPage",
    "ReviewRecord",
    "RowModel",
    "StyledText",
    "SummaryRow",
    "TextStyle",
]
