"""Decoded review payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ReviewRecord:
    """A single review exactly as delivered by the provider."""

    text: str
    created: str
    first_name: str
    last_name: str
    rating: int
    avatar_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReviewRecord":
        """Build a record from an already validated mapping."""

        return cls(
            text=data["text"],
            created=data["created"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            rating=int(data["rating"]),
            avatar_url=data.get("avatar_url") or None,
        )


@dataclass(frozen=True)
class ReviewPage:
    """One page of reviews plus the provider's reported total."""

    items: tuple[ReviewRecord, ...] = field(default_factory=tuple)
    count: int = 0
