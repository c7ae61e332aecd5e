"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RawPage:
    """The raw HTTP response for a single post fetch."""

    url: str
    html: str
    status_code: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class PostStats:
    """Fields extracted from a :class:`RawPage`.

    Either field may be ``None`` independently of the other.
    """

    likes: Optional[int] = None
    post_text: Optional[str] = None
