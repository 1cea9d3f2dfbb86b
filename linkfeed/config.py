"""Centralized configuration for the friend-links feed builder."""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional
from zoneinfo import ZoneInfo

from linkfeed.models import Article

# =========================
# File paths
# =========================
FEEDS_FILE: str = os.getenv("FEEDS_FILE", "rss/rss_feeds.txt")
AVATARS_FILE: str = os.getenv("AVATARS_FILE", "data/avatar_data.json")
OUTPUT_FILE: str = os.getenv("OUTPUT_FILE", "data/rss_data.json")
ERROR_LOG_FILE: str = os.getenv("ERROR_LOG_FILE", "logs/error.log")

# =========================
# RSS
# =========================
RSS_MAX_ATTEMPTS: int = int(os.getenv("RSS_MAX_ATTEMPTS", "3"))
RSS_RETRY_DELAY: float = float(os.getenv("RSS_RETRY_DELAY", "10"))
RSS_FETCH_TIMEOUT: float = float(os.getenv("RSS_FETCH_TIMEOUT", "10"))
# 0 = toutes les sources en parallele
RSS_MAX_CONCURRENCY: int = int(os.getenv("RSS_MAX_CONCURRENCY", "0"))
USER_AGENT: str = os.getenv("USER_AGENT", "linkfeed/1.0")

# =========================
# Display
# =========================
TZ: ZoneInfo = ZoneInfo(os.getenv("LINKFEED_TIMEZONE", "UTC"))

DEFAULT_AVATAR_URL: str = "https://cos.lhasa.icu/LinksAvatar/default.png"

# Titre du flux -> nom affiche
NAME_ALIASES: Dict[str, str] = {
    "obaby@mars": "obaby",
    "青山小站 | 一个在帝都搬砖的新时代农民工": "青山小站",
    "Homepage on Miao Yu | 于淼": "于淼",
    "Homepage on Yihui Xie | 谢益辉": "谢益辉",
}


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    retry_delay: float = 10.0
    request_timeout: float = 10.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts doit etre >= 1")
        if self.retry_delay < 0 or self.request_timeout <= 0:
            raise ValueError("retry_delay >= 0 et request_timeout > 0 requis")


@dataclass(frozen=True)
class IdentityConfig:
    aliases: Dict[str, str] = field(default_factory=dict)
    default_avatar: str = DEFAULT_AVATAR_URL


RETRY_POLICY = RetryPolicy(
    max_attempts=RSS_MAX_ATTEMPTS,
    retry_delay=RSS_RETRY_DELAY,
    request_timeout=RSS_FETCH_TIMEOUT,
)

IDENTITY = IdentityConfig(aliases=dict(NAME_ALIASES), default_avatar=DEFAULT_AVATAR_URL)


def max_concurrency() -> Optional[int]:
    """None when fan-out is unbounded."""
    return RSS_MAX_CONCURRENCY if RSS_MAX_CONCURRENCY > 0 else None


# Entree manuelle, toujours ajoutee en fin de liste
STATIC_ARTICLE = Article(
    domain_name="https://foreverblog.cn",
    name="十年之约",
    title="穿梭虫洞-随机访问十年之约友链博客",
    link="https://foreverblog.cn/go.html",
    date="2000-01-01",
    avatar="https://cos.lhasa.icu/LinksAvatar/foreverblog.cn.png",
    published_at=datetime(2000, 1, 1, tzinfo=TZ),
)
