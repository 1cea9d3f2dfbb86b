from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Avatar:
    name: str
    avatar: str


@dataclass(frozen=True)
class FeedItem:
    title: str
    link: str
    published_at: Optional[datetime] = None  # UTC si possible
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Feed:
    title: str
    link: str
    items: List[FeedItem] = field(default_factory=list)


@dataclass(frozen=True)
class Article:
    domain_name: str
    name: str
    title: str
    link: str
    date: str  # YYYY-MM-DD
    avatar: str
    published_at: datetime  # cle de tri, jamais serialisee

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domainName": self.domain_name,
            "name": self.name,
            "title": self.title,
            "link": self.link,
            "date": self.date,
            "avatar": self.avatar,
        }
