from __future__ import annotations

import copy
import logging
from collections import Counter
from typing import Iterable, List, Tuple
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup, ParserRejectedMarkup

from .errors import FetchError, ParseError
from .patterns import (
    ABOUT_HINTS,
    AD_HINTS,
    AUTHOR_BYLINE_RE,
    AUTHOR_WINDOW_CHARS,
    CONTACT_HINTS,
    EXCERPT_CHARS,
    FILLER_HINTS,
    HEADING_TAGS,
    INTERSTITIAL_HINTS,
    MAIN_CONTENT_TAGS,
    NON_CONTENT_TAGS,
    NUMERIC_DATE_RE,
    POLICY_HINTS,
    PURPOSE_BLOG,
    PURPOSE_RULES,
    PURPOSE_UNCLEAR,
    PURPOSE_WINDOW_CHARS,
    REPETITION_MIN_COUNT,
    REPETITION_MIN_TOKENS,
    REPETITION_NGRAM,
    SPAM_PATTERNS,
    TEXT_DATE_RE,
    YMYL_DEFAULT_RISK,
    YMYL_KEYWORDS,
    YMYL_RISK_TIERS,
)
from .signals import SiteSignals
from .utils import hostname, normalize_whitespace, resolve_host, tokenize

logger = logging.getLogger(__name__)

UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 Chrome/124 Safari/537.36 sitescan/0.1"
DEFAULT_TIMEOUT = 15


def fetch(url: str, timeout: float = DEFAULT_TIMEOUT) -> Tuple[int, str, str]:
    """GET ``url`` following redirects; returns (status, body, final url).

    A non-2xx status is returned as data, not raised.
    """
    try:
        resp = requests.get(url, timeout=timeout, headers={"User-Agent": UA}, allow_redirects=True)
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc
    logger.debug("Fetched %s -> %s (status %s, %d chars)", url, resp.url, resp.status_code, len(resp.text))
    return resp.status_code, resp.text, resp.url or url


def parse_html(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"Could not parse markup: {exc}") from exc


def repetition_score(text: str) -> float:
    """Share of 5-gram windows belonging to 5-grams seen at least 3 times."""
    tokens = tokenize(text)
    if len(tokens) < REPETITION_MIN_TOKENS:
        return 0.0
    n = REPETITION_NGRAM
    grams = Counter(" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1))
    repeated = sum(c for c in grams.values() if c >= REPETITION_MIN_COUNT)
    return min(1.0, repeated / max(1, len(tokens) - n))


def ymyl_assessment(text: str) -> Tuple[str, Tuple[str, ...]]:
    lowered = text.lower()
    categories: List[str] = []
    hits = 0
    for category, keywords in YMYL_KEYWORDS.items():
        category_hits = sum(1 for k in keywords if k in lowered)
        if category_hits:
            categories.append(category)
            hits += category_hits
    for minimum, risk in YMYL_RISK_TIERS:
        if hits >= minimum:
            return risk, tuple(categories)
    return YMYL_DEFAULT_RISK, tuple(categories)


def guess_purpose(title: str, text: str, url: str) -> str:
    window = f"{title} {text[:PURPOSE_WINDOW_CHARS]}".lower()
    for pattern, label in PURPOSE_RULES:
        if pattern.search(window):
            return label
    try:
        path = urlparse(url).path.lower()
    except ValueError:
        path = ""
    if "blog" in path:
        return PURPOSE_BLOG
    return PURPOSE_UNCLEAR


def count_hints(haystack: str, hints: Iterable[str]) -> int:
    return sum(1 for h in hints if h in haystack)


def _any_blob_matches(blobs: List[str], hints: Iterable[str]) -> bool:
    hints = tuple(hints)
    return any(h in blob for blob in blobs for h in hints)


def _main_content_text(soup: BeautifulSoup) -> str:
    content = copy.copy(soup)
    for tag in content.find_all(list(NON_CONTENT_TAGS)):
        tag.extract()
    region = None
    for name in MAIN_CONTENT_TAGS:
        region = content.find(name)
        if region is not None:
            break
    if region is None:
        # html.parser builds no <body> for body-less pages; keep head text out
        for tag in content.find_all(["head", "title"]):
            tag.extract()
        region = content
    return normalize_whitespace(region.get_text(" "))


def _has_author(soup: BeautifulSoup, mc_text: str) -> bool:
    if soup.find(attrs={"rel": "author"}) or soup.find("meta", attrs={"name": "author"}):
        return True
    return bool(AUTHOR_BYLINE_RE.search(mc_text[:AUTHOR_WINDOW_CHARS]))


def _has_date(soup: BeautifulSoup, mc_text: str) -> bool:
    if soup.find("time") is not None:
        return True
    return bool(NUMERIC_DATE_RE.search(mc_text) or TEXT_DATE_RE.search(mc_text))


def _has_structured_data(html: str) -> bool:
    return "schema.org" in html.lower() or ('"@type"' in html and '"@context"' in html)


def _meta_content(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find("meta", attrs={"name": name})
    return normalize_whitespace(tag.get("content")) if tag else ""


def parse_signals(requested_url: str, final_url: str, status_code: int, html: str) -> SiteSignals:
    """Derive the signal record from an already fetched page body."""
    soup = parse_html(html)

    title_tag = soup.find("title")
    title = normalize_whitespace(title_tag.get_text()) if title_tag else ""
    meta_description = _meta_content(soup, "description")
    canonical_tag = soup.find("link", attrs={"rel": "canonical"})
    canonical = (canonical_tag.get("href") or "").strip() if canonical_tag else ""
    html_tag = soup.find("html")
    lang = (html_tag.get("lang") or "").strip() if html_tag else ""

    mc_text = _main_content_text(soup)
    word_count = len(tokenize(mc_text))
    heading_count = len(soup.find_all(list(HEADING_TAGS)))

    anchors = soup.find_all("a", href=True)
    total_links = len(anchors)
    base_host = hostname(final_url)
    outbound = 0
    for a in anchors:
        host = resolve_host(final_url, a.get("href") or "")
        if host and host != base_host:
            outbound += 1
    link_ratio = total_links / max(1, word_count)

    blobs = [f"{a.get('href') or ''} {a.get_text()}".lower() for a in anchors]
    html_lower = html.lower()
    mc_lower = mc_text.lower()
    ymyl_risk, ymyl_categories = ymyl_assessment(f"{title} {mc_text}")

    signals = SiteSignals(
        requested_url=requested_url,
        final_url=final_url,
        http_status=status_code,
        title=title,
        meta_description=meta_description,
        canonical_url=canonical or None,
        language=lang or None,
        main_content_word_count=word_count,
        heading_count=heading_count,
        filler_phrase_hits=count_hints(mc_lower, FILLER_HINTS),
        repetition_score=round(repetition_score(mc_text), 4),
        has_author_signal=_has_author(soup, mc_text),
        has_date_signal=_has_date(soup, mc_text),
        has_structured_data=_has_structured_data(html),
        has_about_link=_any_blob_matches(blobs, ABOUT_HINTS),
        has_contact_link=_any_blob_matches(blobs, CONTACT_HINTS),
        has_policy_links=_any_blob_matches(blobs, POLICY_HINTS),
        ad_hint_count=count_hints(html_lower, AD_HINTS),
        has_interstitial_hint=count_hints(html_lower, INTERSTITIAL_HINTS) > 0,
        total_link_count=total_links,
        outbound_link_count=outbound,
        link_to_text_ratio=round(link_ratio, 4),
        ymyl_risk=ymyl_risk,
        ymyl_categories=ymyl_categories,
        purpose_guess=guess_purpose(title, mc_text, final_url),
        spam_patterns_found=tuple(p.pattern for p in SPAM_PATTERNS if p.search(html_lower)),
        main_content_excerpt=mc_text[:EXCERPT_CHARS],
    )
    logger.debug(
        "Signals for %s: %d words, %d headings, %d links, ymyl=%s",
        final_url,
        word_count,
        heading_count,
        total_links,
        ymyl_risk,
    )
    return signals


def extract(url: str, timeout: float = DEFAULT_TIMEOUT) -> SiteSignals:
    status, html, final_url = fetch(url, timeout=timeout)
    return parse_signals(url, final_url, status, html)
