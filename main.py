import asyncio
import logging
import sys
from datetime import tzinfo
from typing import List, Mapping, Optional, Sequence

from linkfeed import config
from linkfeed.aggregator import aggregate
from linkfeed.config import IdentityConfig, RetryPolicy
from linkfeed.errlog import attach_error_log
from linkfeed.models import Article
from linkfeed.sources import SourceError, load_avatars, read_feeds, write_articles_json


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
log = logging.getLogger("linkfeed.main")


def publish_articles(
    feeds: Sequence[str],
    avatars: Mapping[str, str],
    output_path: str,
    *,
    policy: RetryPolicy = config.RETRY_POLICY,
    identity: IdentityConfig = config.IDENTITY,
    static_article: Article = config.STATIC_ARTICLE,
    max_concurrency: Optional[int] = None,
    tz: tzinfo = config.TZ,
    session=None,
) -> List[Article]:
    """Aggregate every feed, append the static entry and write the JSON.

    Raises OSError when the output cannot be written.
    """
    log.info("Flux: %d, avatars: %d.", len(feeds), len(avatars))
    articles = asyncio.run(aggregate(
        feeds, avatars,
        policy=policy,
        identity=identity,
        session=session,
        max_concurrency=max_concurrency,
        tz=tz,
    ))
    articles.append(static_article)

    write_articles_json(output_path, articles)
    return articles


def run_pipeline(
    feeds_path: str = config.FEEDS_FILE,
    avatars_path: str = config.AVATARS_FILE,
    output_path: str = config.OUTPUT_FILE,
    **kwargs,
) -> List[Article]:
    """Load both input lists then publish. Nothing is written if a load fails."""
    feeds = read_feeds(feeds_path)
    avatars = load_avatars(avatars_path)
    return publish_articles(feeds, avatars, output_path, **kwargs)


def main() -> int:
    attach_error_log(config.ERROR_LOG_FILE)

    try:
        feeds = read_feeds(config.FEEDS_FILE)
    except SourceError as e:
        log.error("Read feeds error: %s", e)
        return 1

    try:
        avatars = load_avatars(config.AVATARS_FILE)
    except SourceError as e:
        log.error("Load avatars error: %s", e)
        return 1

    try:
        articles = publish_articles(
            feeds, avatars, config.OUTPUT_FILE,
            max_concurrency=config.max_concurrency(),
        )
    except OSError as e:
        log.error("Write %s error: %s", config.OUTPUT_FILE, e)
        return 1

    log.info("RSS fetch completed: %d articles.", len(articles))
    return 0


if __name__ == "__main__":
    sys.exit(main())
