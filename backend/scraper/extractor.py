"""Field extraction: turns a :class:`RawPage` into :class:`PostStats`.

Threads embeds the post as JSON inside ``<script>`` tags and the field names
drift between deployments, so each field is located by an ordered list of
named regular expressions.  The first pattern that yields a usable value wins.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from backend.scraper.errors import ExtractionFailure
from backend.scraper.models import PostStats, RawPage

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pattern tables (priority order)
# ---------------------------------------------------------------------------

LIKE_COUNT_PATTERNS: List[Tuple[str, re.Pattern[str]]] = [
    ("like_count", re.compile(r'"like_count"\s*:\s*(\d+)')),
    ("likeCount", re.compile(r'"likeCount"\s*:\s*(\d+)')),
    ("likes.count", re.compile(r'"likes"\s*:\s*\{\s*"count"\s*:\s*(\d+)')),
    (
        "meta",
        re.compile(
            r'meta\s+(?:property|name)="[^"]*like[^"]*"\s+content="(\d+)"',
            re.IGNORECASE,
        ),
    ),
]

POST_TEXT_PATTERNS: List[Tuple[str, re.Pattern[str]]] = [
    ("text.text", re.compile(r'"text"\s*:\s*\{"text"\s*:\s*"([^"]+)"')),
    ("caption.text", re.compile(r'"caption"\s*:\s*\{\s*"text"\s*:\s*"([^"]+)"')),
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _unescape(text: str) -> str:
    """Undo the three JSON escapes Threads uses in captions.

    Order matters: ``\\n`` and ``\\"`` are replaced before ``\\\\``.
    """
    return text.replace("\\n", "\n").replace('\\"', '"').replace("\\\\", "\\")


def _parse_count(value: str) -> Optional[int]:
    try:
        count = int(value, 10)
    except ValueError:
        return None
    return count if count > 0 else None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_like_count(html: str) -> Optional[int]:
    """Return the post's like count, or ``None`` if no pattern yields one.

    A count of zero is treated as "not found" and the next pattern is tried.
    """
    for name, pattern in LIKE_COUNT_PATTERNS:
        match = pattern.search(html)
        if not match:
            continue
        count = _parse_count(match.group(1))
        if count is not None:
            logger.debug("Like count %d matched by pattern %r", count, name)
            return count
        logger.debug("Pattern %r matched a non-positive count; trying next", name)

    logger.warning("No like-count pattern matched (%d chars of HTML)", len(html))
    return None


def extract_post_text(html: str) -> Optional[str]:
    """Return the unescaped post caption, or ``None``."""
    for name, pattern in POST_TEXT_PATTERNS:
        match = pattern.search(html)
        if match:
            logger.debug("Post text matched by pattern %r", name)
            return _unescape(match.group(1))
    return None


def extract_stats(raw: RawPage) -> PostStats:
    """Run both extractors over *raw*.

    Raises:
        ExtractionFailure: If the like count could not be found.  The post
            text alone is not a usable result.
    """
    stats = PostStats(
        likes=extract_like_count(raw.html),
        post_text=extract_post_text(raw.html),
    )
    if stats.likes is None:
        raise ExtractionFailure(len(raw.html))
    return stats
