from __future__ import annotations

import math
import re
from typing import List, Optional
from urllib.parse import urljoin, urlparse, urlunparse

TOKEN_RE = re.compile(r"[A-Za-z0-9']+")
WHITESPACE_RE = re.compile(r"\s+")


def normalize_url(url: str) -> str:
    cleaned = url.strip()
    parsed = urlparse(cleaned)
    scheme = (parsed.scheme or "").lower()
    netloc = parsed.netloc
    path = parsed.path
    query = parsed.query

    if not netloc:
        if scheme not in {"http", "https"}:
            scheme = "https"
        reparsed = urlparse(f"//{cleaned}", scheme=scheme)
        if reparsed.netloc:
            netloc = reparsed.netloc
            path = reparsed.path
            query = reparsed.query or query
    else:
        scheme = scheme or "https"

    if not netloc and path and not path.startswith("/"):
        netloc = path
        path = ""

    if not netloc:
        raise ValueError(f"Cannot determine host for URL: {url!r}")

    if not path:
        path = "/"
    elif not path.startswith("/"):
        path = f"/{path}"

    return urlunparse((scheme, netloc, path, "", query, ""))


def normalize_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text).strip()


def tokenize(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [t.lower() for t in TOKEN_RE.findall(text)]


def hostname(url: str) -> Optional[str]:
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def resolve_host(base_url: str, href: str) -> Optional[str]:
    """Hostname of ``href`` resolved against ``base_url``; None when malformed."""
    try:
        absolute = urljoin(base_url, href)
    except ValueError:
        return None
    return hostname(absolute)


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def round_half_up(n: float) -> int:
    return int(math.floor(n + 0.5))
