from datetime import datetime, tzinfo
from urllib.parse import urlparse


class DomainError(ValueError):
    """Raised when no scheme://host origin can be derived from a URL."""


_ALLOWED_CONTROL = frozenset("\t\n\r")


def clean_xml_content(content: str) -> str:
    """Drop control characters that strict XML parsers reject."""
    content = content or ""
    return "".join(ch for ch in content if ch in _ALLOWED_CONTROL or ord(ch) >= 0x20)


def extract_domain(url: str) -> str:
    try:
        u = urlparse((url or "").strip())
        host = u.hostname
    except ValueError as e:
        raise DomainError(f"invalid url: {url!r}: {e}") from e
    if not host:
        raise DomainError(f"empty domain from url: {url!r}")
    scheme = u.scheme or "https"
    return f"{scheme}://{host}"


def format_date(dt: datetime, tz: tzinfo) -> str:
    return dt.astimezone(tz).strftime("%Y-%m-%d")
