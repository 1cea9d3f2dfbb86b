"""Shared fakes: an aiohttp-like session serving canned feed payloads."""

import asyncio
from collections import Counter

import pytest


def make_rss(title="Blog", link="https://blog.example.com/", items=()):
    """Build a small RSS 2.0 document. items: iterable of (title, link, pubDate or None)."""
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0"><channel>',
        f"<title>{title}</title>",
        f"<link>{link}</link>",
    ]
    for it_title, it_link, pub in items:
        parts.append("<item>")
        parts.append(f"<title>{it_title}</title>")
        parts.append(f"<link>{it_link}</link>")
        if pub:
            parts.append(f"<pubDate>{pub}</pubDate>")
        parts.append("</item>")
    parts.append("</channel></rss>")
    return "\n".join(parts)


class FakeResponse:
    def __init__(self, session, route):
        self.session = session
        self.route = route
        self.status = 200
        self.body = ""

    async def __aenter__(self):
        self.session.in_flight += 1
        self.session.peak = max(self.session.peak, self.session.in_flight)
        if self.session.latency:
            await asyncio.sleep(self.session.latency)
        if isinstance(self.route, BaseException):
            self.session.in_flight -= 1
            raise self.route
        self.status, self.body = self.route
        return self

    async def __aexit__(self, *exc):
        self.session.in_flight -= 1
        return False

    def raise_for_status(self):
        if self.status >= 400:
            import aiohttp
            from types import SimpleNamespace
            raise aiohttp.ClientResponseError(
                SimpleNamespace(real_url="http://fake"), (), status=self.status, message="error",
            )

    async def text(self, errors="strict"):
        return self.body


class FakeSession:
    """routes: url -> (status, body) | exception | list of those (one per call)."""

    def __init__(self, routes, latency=0.0):
        self.routes = routes
        self.latency = latency
        self.calls = Counter()
        self.requests = []
        self.in_flight = 0
        self.peak = 0

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        n = self.calls[url]
        self.calls[url] += 1
        route = self.routes[url]
        if isinstance(route, list):
            route = route[min(n, len(route) - 1)]
        return FakeResponse(self, route)


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def rss():
    return make_rss
