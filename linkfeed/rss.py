import asyncio
import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Mapping, Optional

import aiohttp
import feedparser

from linkfeed.config import TZ, USER_AGENT, IdentityConfig, RetryPolicy
from linkfeed.identity import resolve_identity
from linkfeed.models import Article, Feed, FeedItem
from linkfeed.utils import DomainError, extract_domain, format_date

log = logging.getLogger("linkfeed.rss")

# Le contenu est deja decode en str: on impose utf-8 a feedparser
_PARSE_HEADERS = {"content-type": "application/xml; charset=utf-8"}


class FetchError(Exception):
    """Raised when a feed could not be downloaded after every attempt."""


class ParseError(Exception):
    """Raised when a payload is not recognized as a feed after every attempt."""


def _describe(err: Any) -> str:
    return str(err) or type(err).__name__


def _struct_to_dt(st: Any) -> Optional[datetime]:
    if st:
        try:
            return datetime(*st[:6], tzinfo=timezone.utc)
        except (TypeError, ValueError):
            return None
    return None


def _entry_field(entry: Any, key: str) -> Any:
    # FeedParserDict: "in" ne declenche pas le repli updated -> published
    if isinstance(entry, dict):
        return entry[key] if key in entry else None
    return getattr(entry, key, None)


def _entry_to_item(entry: Any) -> FeedItem:
    return FeedItem(
        title=str(_entry_field(entry, "title") or ""),
        link=str(_entry_field(entry, "link") or ""),
        published_at=_struct_to_dt(_entry_field(entry, "published_parsed")),
        updated_at=_struct_to_dt(_entry_field(entry, "updated_parsed")),
    )


def feed_from_parsed(parsed: Any) -> Feed:
    meta = getattr(parsed, "feed", None)
    entries = getattr(parsed, "entries", None) or []
    return Feed(
        title=str(getattr(meta, "title", "") or ""),
        link=str(getattr(meta, "link", "") or ""),
        items=[_entry_to_item(e) for e in entries],
    )


async def fetch_feed(session: aiohttp.ClientSession, url: str, policy: RetryPolicy) -> str:
    timeout = aiohttp.ClientTimeout(total=policy.request_timeout)
    headers = {"User-Agent": USER_AGENT}
    last_err: Any = None

    for attempt in range(1, policy.max_attempts + 1):
        try:
            async with session.get(url, timeout=timeout, headers=headers) as resp:
                resp.raise_for_status()
                return await resp.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError, LookupError) as e:
            last_err = e
            log.warning(
                "Get RSS error: %s (attempt %d/%d): %s",
                url, attempt, policy.max_attempts, _describe(e),
            )
            if attempt < policy.max_attempts:
                await asyncio.sleep(policy.retry_delay)

    log.error("Failed to fetch RSS: %s: %s", url, _describe(last_err))
    raise FetchError(f"{url}: {_describe(last_err)}") from last_err


async def parse_feed(content: str, url: str, policy: RetryPolicy) -> Feed:
    data = content.encode("utf-8")
    last_err: Any = None

    # meme entree a chaque tentative
    for attempt in range(1, policy.max_attempts + 1):
        parsed = await asyncio.to_thread(feedparser.parse, data, response_headers=_PARSE_HEADERS)
        if getattr(parsed, "version", ""):
            return feed_from_parsed(parsed)
        last_err = getattr(parsed, "bozo_exception", None) or "unrecognized feed format"
        log.warning(
            "Parse RSS error: %s (attempt %d/%d): %s",
            url, attempt, policy.max_attempts, _describe(last_err),
        )
        if attempt < policy.max_attempts:
            await asyncio.sleep(policy.retry_delay)

    log.error("Failed to parse RSS: %s: %s", url, _describe(last_err))
    raise ParseError(f"{url}: {_describe(last_err)}")


def item_published_at(item: FeedItem, now: datetime) -> datetime:
    return item.published_at or item.updated_at or now


def feed_to_article(
    feed: Feed,
    avatars: Mapping[str, str],
    identity: IdentityConfig,
    now: Optional[datetime] = None,
    tz: tzinfo = TZ,
) -> Optional[Article]:
    """Build the article for the newest item of a feed, or None if it has no items."""
    if not feed.items:
        return None

    item = feed.items[0]
    published = item_published_at(item, now or datetime.now(timezone.utc))
    name, avatar = resolve_identity(feed.title, identity.aliases, avatars, identity.default_avatar)

    domain_name = ""
    if feed.link:
        try:
            domain_name = extract_domain(feed.link)
        except DomainError as e:
            log.warning("Extract domain error: %s: %s", name, e)

    return Article(
        domain_name=domain_name,
        name=name,
        title=item.title,
        link=item.link,
        date=format_date(published, tz),
        avatar=avatar,
        published_at=published,
    )
