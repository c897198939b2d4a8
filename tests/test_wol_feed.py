from __future__ import annotations

import asyncio
import http.client
import io
import urllib.error
import urllib.request
from datetime import date

import pytest

from adapters.wol_feed import FeedError, WolFeedClient


class FakeResponse:
    def __init__(self, body: str) -> None:
        self._body = body.encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def test_build_url_zero_pads_date() -> None:
    client = WolFeedClient(base_url="https://wol.jw.org/")
    assert client.build_url(date(2024, 5, 1)) == "https://wol.jw.org/wol/dt/r1/lp-e/2024/05/01"
    other = WolFeedClient(language_path="/r4/lp-s/")
    assert other.build_url(date(2024, 12, 31)) == "https://wol.jw.org/wol/dt/r4/lp-s/2024/12/31"


def test_parse_payload_returns_first_item_content() -> None:
    body = '{"items": [{"content": "<p>first</p>"}, {"content": "<p>second</p>"}]}'
    assert WolFeedClient.parse_payload(body) == "<p>first</p>"


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("", "Empty response"),
        ("   ", "Empty response"),
        ("<html>", "Failed to parse response JSON"),
        ('{"items": []}', "Unexpected response format"),
        ('{"items": [{"title": "x"}]}', "Unexpected response format"),
        ("[1, 2]", "Unexpected response format"),
        ('{"items": {"content": "<p>x</p>"}}', "Unexpected response format"),
        ('{"items": ["<p>x</p>"]}', "Unexpected response format"),
    ],
)
def test_parse_payload_errors(body: str, message: str) -> None:
    with pytest.raises(FeedError, match=message):
        WolFeedClient.parse_payload(body)


def test_fetch_daily_html_requests_json(monkeypatch) -> None:
    requests: list[urllib.request.Request] = []

    def fake_urlopen(request, timeout):
        requests.append(request)
        return FakeResponse('{"items": [{"content": "<p>text</p>"}]}')

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    client = WolFeedClient(timeout=5)

    assert asyncio.run(client.fetch_daily_html(date(2024, 5, 1))) == "<p>text</p>"
    assert requests[0].full_url == "https://wol.jw.org/wol/dt/r1/lp-e/2024/05/01"
    assert requests[0].get_header("Accept") == "application/json"


def test_http_errors_become_feed_errors(monkeypatch) -> None:
    def fake_urlopen(request, timeout):
        raise urllib.error.HTTPError(request.full_url, 503, "Service Unavailable", None, io.BytesIO(b"busy"))

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    with pytest.raises(FeedError, match="503"):
        asyncio.run(WolFeedClient().fetch_daily_html(date(2024, 5, 1)))


def test_network_errors_become_feed_errors(monkeypatch) -> None:
    def fake_urlopen(request, timeout):
        raise urllib.error.URLError("no route to host")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    with pytest.raises(FeedError, match="Feed unreachable"):
        asyncio.run(WolFeedClient().fetch_daily_html(date(2024, 5, 1)))


@pytest.mark.parametrize(
    "error",
    [
        TimeoutError("The read operation timed out"),
        http.client.RemoteDisconnected("Remote end closed connection without response"),
        ConnectionResetError(104, "Connection reset by peer"),
    ],
)
def test_connection_failures_become_feed_errors(monkeypatch, error: Exception) -> None:
    def fake_urlopen(request, timeout):
        raise error

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    with pytest.raises(FeedError, match="Feed connection failed") as exc_info:
        asyncio.run(WolFeedClient().fetch_daily_html(date(2024, 5, 1)))
    assert exc_info.value.__cause__ is error


def test_timeout_while_reading_body_becomes_feed_error(monkeypatch) -> None:
    class StalledResponse(FakeResponse):
        def read(self) -> bytes:
            raise TimeoutError("The read operation timed out")

    monkeypatch.setattr(urllib.request, "urlopen", lambda request, timeout: StalledResponse(""))
    with pytest.raises(FeedError, match="Feed connection failed"):
        asyncio.run(WolFeedClient(timeout=0.5).fetch_daily_html(date(2024, 5, 1)))
