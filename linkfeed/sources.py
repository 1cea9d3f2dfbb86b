"""Readers for the feed and avatar lists, writer for the output JSON."""

import json
import os
from typing import Dict, List, Sequence

from linkfeed.models import Article, Avatar


class SourceError(Exception):
    """Raised when an input list is unreadable or malformed."""


def read_feeds(path: str) -> List[str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"lecture {path} impossible: {e}") from e

    feeds = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        feeds.append(line)
    return feeds


def parse_avatars(data) -> List[Avatar]:
    if not isinstance(data, list):
        raise SourceError("la liste d'avatars doit etre un tableau JSON")
    out = []
    for entry in data:
        if not isinstance(entry, dict):
            raise SourceError(f"entree d'avatar invalide: {entry!r}")
        out.append(Avatar(name=str(entry.get("name") or ""), avatar=str(entry.get("avatar") or "")))
    return out


def load_avatars(path: str) -> Dict[str, str]:
    """Load avatar_data.json as a name -> avatar url mapping (last entry wins)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SourceError(f"lecture {path} impossible: {e}") from e
    return {a.name: a.avatar for a in parse_avatars(data)}


def write_articles_json(path: str, articles: Sequence[Article]) -> None:
    """Atomic write of the output array."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    tmp = f"{path}.tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump([a.to_dict() for a in articles], f, ensure_ascii=False, indent=2)
        f.write("\n")
    os.replace(tmp, path)
