"""Tests for the scraper layer (post fetch + field extraction).

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``fetch_post`` tests.
- pytest-asyncio runs with ``asyncio_mode = "auto"`` (see pyproject.toml), so
  ``async def`` tests are collected directly.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from backend.config import settings
from backend.scraper import scrape_post
from backend.scraper.errors import ExtractionFailure, TransportError, UpstreamHTTPError
from backend.scraper.extractor import (
    _unescape,
    extract_like_count,
    extract_post_text,
    extract_stats,
)
from backend.scraper.fetcher import BROWSER_HEADERS, fetch_post
from backend.scraper.models import PostStats, RawPage


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_POST_URL = "https://www.threads.net/@someone/post/ABC123"

_POST_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Post</title></head>
<body>
<script type="application/json">
{"post":{"caption":{"text":"Morning coffee \\u2615"},"text":{"text":"New menu!\\nCome try it"},
"like_count":42,"likeCount":7}}
</script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# extract_like_count
# ---------------------------------------------------------------------------

class TestExtractLikeCount:
    def test_like_count_field(self) -> None:
        assert extract_like_count('{"like_count": 128}') == 128

    def test_like_count_wins_over_like_count_camel(self) -> None:
        html = '{"likeCount":5,"like_count":9}'
        assert extract_like_count(html) == 9

    def test_camel_case_field(self) -> None:
        assert extract_like_count('{"likeCount" : 31}') == 31

    def test_nested_likes_count(self) -> None:
        assert extract_like_count('{"likes": { "count": 17 }}') == 17

    def test_meta_tag_property(self) -> None:
        html = '<meta property="og:likes" content="250">'
        assert extract_like_count(html) == 250

    def test_meta_tag_name_case_insensitive(self) -> None:
        html = '<META NAME="post:LikeTotal" CONTENT="3">'
        assert extract_like_count(html) == 3

    def test_zero_falls_through_to_next_pattern(self) -> None:
        html = '{"like_count":0,"likeCount":12}'
        assert extract_like_count(html) == 12

    def test_zero_with_no_later_pattern_returns_none(self) -> None:
        assert extract_like_count('{"like_count":0}') is None

    def test_only_first_match_of_a_pattern_is_used(self) -> None:
        # The second like_count is never consulted; fall-through goes to the
        # next pattern instead.
        html = '{"like_count":0},{"like_count":99}'
        assert extract_like_count(html) is None

    def test_no_pattern_returns_none(self) -> None:
        assert extract_like_count("<html><body>nothing here</body></html>") is None

    def test_full_page(self) -> None:
        assert extract_like_count(_POST_HTML) == 42


# ---------------------------------------------------------------------------
# extract_post_text
# ---------------------------------------------------------------------------

class TestExtractPostText:
    def test_text_text_field_wins(self) -> None:
        assert extract_post_text(_POST_HTML) == "New menu!\nCome try it"

    def test_caption_fallback(self) -> None:
        html = '{"caption": {"text": "Hello there"}}'
        assert extract_post_text(html) == "Hello there"

    def test_text_pattern_requires_adjacent_brace(self) -> None:
        # The first pattern allows no whitespace between "{" and "text".
        html = '{"text": { "text": "spaced"}}'
        assert extract_post_text(html) is None

    def test_missing_returns_none(self) -> None:
        assert extract_post_text('{"like_count":3}') is None

    def test_unicode_escapes_are_left_alone(self) -> None:
        html = '{"caption":{"text":"caf\\u00e9"}}'
        assert extract_post_text(html) == "caf\\u00e9"


class TestUnescape:
    def test_newline(self) -> None:
        assert _unescape("a\\nb") == "a\nb"

    def test_backslash(self) -> None:
        assert _unescape("C:\\\\dir") == "C:\\dir"

    def test_sequence_in_fixed_order(self) -> None:
        assert _unescape("\\n\\\\") == "\n\\"
        assert _unescape("\\\\") == "\\"

    def test_escaped_backslash_before_n_becomes_newline(self) -> None:
        # "\\n" is handled by the newline rule first, leaving a lone backslash.
        assert _unescape("\\\\n") == "\\\n"


# ---------------------------------------------------------------------------
# extract_stats
# ---------------------------------------------------------------------------

class TestExtractStats:
    def test_returns_post_stats(self) -> None:
        raw = RawPage(url=_POST_URL, html=_POST_HTML, status_code=200)
        stats = extract_stats(raw)

        assert stats == PostStats(likes=42, post_text="New menu!\nCome try it")

    def test_text_without_likes_raises(self) -> None:
        html = '{"caption":{"text":"orphan"}}'
        raw = RawPage(url=_POST_URL, html=html, status_code=200)
        with pytest.raises(ExtractionFailure) as excinfo:
            extract_stats(raw)

        assert excinfo.value.html_length == len(html)
        assert str(excinfo.value) == "Could not extract like count from page"

    def test_likes_without_text(self) -> None:
        raw = RawPage(url=_POST_URL, html='{"like_count":8}', status_code=200)
        assert extract_stats(raw) == PostStats(likes=8, post_text=None)


# ---------------------------------------------------------------------------
# fetch_post
# ---------------------------------------------------------------------------

class TestFetchPost:
    async def test_successful_fetch_returns_raw_page(self) -> None:
        with respx.mock:
            respx.get(_POST_URL).mock(return_value=httpx.Response(200, text=_POST_HTML))
            raw = await fetch_post(_POST_URL)

        assert isinstance(raw, RawPage)
        assert raw.url == _POST_URL
        assert raw.status_code == 200
        assert raw.html == _POST_HTML

    async def test_sends_browser_headers(self) -> None:
        with respx.mock:
            route = respx.get(_POST_URL).mock(return_value=httpx.Response(200, text="ok"))
            await fetch_post(_POST_URL)

        sent = route.calls.last.request.headers
        for name, value in BROWSER_HEADERS.items():
            assert sent[name] == value

    async def test_defaults_to_configured_url(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "target_url", _POST_URL)
        with respx.mock:
            route = respx.get(_POST_URL).mock(return_value=httpx.Response(200, text="ok"))
            raw = await fetch_post()

        assert route.called
        assert raw.url == _POST_URL

    async def test_follows_redirects(self) -> None:
        target = "https://www.threads.com/@someone/post/ABC123"
        with respx.mock:
            respx.get(_POST_URL).mock(
                return_value=httpx.Response(301, headers={"Location": target})
            )
            respx.get(target).mock(return_value=httpx.Response(200, text=_POST_HTML))
            raw = await fetch_post(_POST_URL)

        assert raw.status_code == 200
        assert raw.html == _POST_HTML

    async def test_non_2xx_raises_upstream_error(self) -> None:
        with respx.mock:
            respx.get(_POST_URL).mock(return_value=httpx.Response(404, text="Not Found"))
            with pytest.raises(UpstreamHTTPError) as excinfo:
                await fetch_post(_POST_URL)

        assert excinfo.value.status_code == 404
        assert str(excinfo.value) == "Threads returned HTTP 404"

    async def test_network_error_raises_transport_error(self) -> None:
        with respx.mock:
            respx.get(_POST_URL).mock(side_effect=httpx.ConnectTimeout("timeout"))
            with pytest.raises(TransportError) as excinfo:
                await fetch_post(_POST_URL)

        assert str(excinfo.value) == "timeout"
        assert isinstance(excinfo.value.__cause__, httpx.ConnectTimeout)


class TestScrapePost:
    async def test_fetch_and_extract(self) -> None:
        with respx.mock:
            respx.get(_POST_URL).mock(return_value=httpx.Response(200, text=_POST_HTML))
            stats = await scrape_post(_POST_URL)

        assert stats.likes == 42

    async def test_unparseable_page_raises(self) -> None:
        with respx.mock:
            respx.get(_POST_URL).mock(return_value=httpx.Response(200, text="<html></html>"))
            with pytest.raises(ExtractionFailure):
                await scrape_post(_POST_URL)
