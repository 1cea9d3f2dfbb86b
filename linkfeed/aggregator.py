"""Concurrent fetch/parse of every feed source and merge into one sorted list."""

import asyncio
import contextlib
import logging
from datetime import datetime, timezone, tzinfo
from typing import Iterable, List, Mapping, Optional, Sequence

import aiohttp

from linkfeed.config import IDENTITY, RETRY_POLICY, TZ, IdentityConfig, RetryPolicy
from linkfeed.models import Article
from linkfeed.rss import FetchError, ParseError, feed_to_article, fetch_feed, parse_feed
from linkfeed.utils import clean_xml_content

log = logging.getLogger("linkfeed.aggregator")


def sort_articles(articles: Iterable[Article]) -> List[Article]:
    """Most recent first. Stable, so ties keep their input order."""
    return sorted(articles, key=lambda a: a.published_at, reverse=True)


async def _process_source(
    session: aiohttp.ClientSession,
    url: str,
    avatars: Mapping[str, str],
    policy: RetryPolicy,
    identity: IdentityConfig,
    tz: tzinfo,
    limiter,
) -> Optional[Article]:
    async with limiter:
        try:
            content = await fetch_feed(session, url, policy)
            feed = await parse_feed(clean_xml_content(content), url, policy)
            article = feed_to_article(feed, avatars, identity, now=datetime.now(timezone.utc), tz=tz)
        except (FetchError, ParseError):
            return None
        except Exception as e:
            log.error("Unexpected error for RSS: %s: %s", url, e)
            log.debug("Traceback pour %s", url, exc_info=True)
            return None

    if article is None:
        log.debug("Flux vide: %s", url)
    return article


async def aggregate(
    feed_urls: Sequence[str],
    avatars: Mapping[str, str],
    *,
    policy: RetryPolicy = RETRY_POLICY,
    identity: IdentityConfig = IDENTITY,
    session: Optional[aiohttp.ClientSession] = None,
    max_concurrency: Optional[int] = None,
    tz: tzinfo = TZ,
) -> List[Article]:
    """Fetch every source concurrently and return their articles, newest first.

    Each source runs as its own task; a failing source contributes nothing
    and never affects the others. Results are collected once every task has
    finished, then merged in feed-list order and sorted.
    """
    if max_concurrency:
        limiter = asyncio.Semaphore(max_concurrency)
    else:
        limiter = contextlib.nullcontext()

    async def _run(sess: aiohttp.ClientSession) -> List[Optional[Article]]:
        tasks = [
            _process_source(sess, url, avatars, policy, identity, tz, limiter)
            for url in feed_urls
        ]
        return await asyncio.gather(*tasks)

    if session is None:
        async with aiohttp.ClientSession() as own_session:
            results = await _run(own_session)
    else:
        results = await _run(session)

    articles = [a for a in results if a is not None]
    log.info("Sources OK: %d/%d.", len(articles), len(feed_urls))
    return sort_articles(articles)
