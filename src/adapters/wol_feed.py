"""Daily text feed adapter for wol.jw.org.

The daily text endpoint answers with JSON when asked for it; the HTML
fragment we extract from lives in ``items[0].content``.
"""

from __future__ import annotations

import asyncio
import http.client
import json
import logging
import urllib.error
import urllib.request
from datetime import date

from core.text_cleaning import WOL_ORIGIN

LOGGER = logging.getLogger(__name__)

DEFAULT_LANGUAGE_PATH = "r1/lp-e"
DEFAULT_USER_AGENT = "dailytext/1.0 (+personal notes)"


class FeedError(RuntimeError):
    """Raised when the feed cannot deliver a daily text fragment."""


class WolFeedClient:
    """Feed adapter that satisfies the core FeedPort contract."""

    def __init__(
        self,
        base_url: str = WOL_ORIGIN,
        language_path: str = DEFAULT_LANGUAGE_PATH,
        timeout: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._language_path = language_path.strip("/")
        self._timeout = timeout
        self._user_agent = user_agent

    def build_url(self, target_date: date) -> str:
        # The endpoint is deterministic and derived from the date alone.
        return (
            f"{self._base_url}/wol/dt/{self._language_path}/"
            f"{target_date.year:04d}/{target_date.month:02d}/{target_date.day:02d}"
        )

    async def fetch_daily_html(self, target_date: date) -> str:
        """Return the HTML fragment for target_date."""

        url = self.build_url(target_date)
        LOGGER.info("Fetching daily text from %s", url)
        # urllib blocks; keep it off the event loop.
        body = await asyncio.to_thread(self._get, url)
        return self.parse_payload(body)

    def _get(self, url: str) -> str:
        request = urllib.request.Request(url, method="GET")
        request.add_header("Accept", "application/json")
        request.add_header("User-Agent", self._user_agent)
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                return response.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace")
            raise FeedError(f"Feed error {e.code}: {body[:200]}") from e
        except urllib.error.URLError as e:
            raise FeedError(f"Feed unreachable: {e.reason}") from e
        except (http.client.HTTPException, OSError) as e:
            # Dropped connections and read timeouts are not wrapped in URLError.
            raise FeedError(f"Feed connection failed: {e!r}") from e

    @staticmethod
    def parse_payload(body: str) -> str:
        """Pull ``items[0].content`` out of a feed response body."""

        if not body or not body.strip():
            raise FeedError("Empty response from feed")
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as e:
            raise FeedError(f"Failed to parse response JSON: {e.msg}") from e

        items = payload.get("items") if isinstance(payload, dict) else None
        first = items[0] if isinstance(items, list) and items else None
        if not isinstance(first, dict) or not first.get("content"):
            raise FeedError("Unexpected response format (no items/content)")
        return str(first["content"])
