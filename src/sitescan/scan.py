from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .anchor import SaltAnchor, compute_anchor
from .errors import ScanError
from .extract import DEFAULT_TIMEOUT, extract
from .facts import build_fact_block
from .quality import PageQualityReport, score_page_quality
from .signals import SiteSignals
from .utils import normalize_url

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    url: str
    signals: SiteSignals
    report: PageQualityReport
    anchor: SaltAnchor
    facts: str
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        s = self.signals
        return {
            "url": s.requested_url,
            "final_url": s.final_url,
            "status_code": s.http_status,
            "title": s.title,
            "meta_description": s.meta_description,
            "canonical": s.canonical_url,
            "lang": s.language,
            "word_count_mc": s.main_content_word_count,
            "heading_count": s.heading_count,
            "outbound_link_count": s.outbound_link_count,
            "total_link_count": s.total_link_count,
            "link_to_text_ratio": s.link_to_text_ratio,
            "repeated_text_score": s.repetition_score,
            "filler_hits": s.filler_phrase_hits,
            "spam_patterns_found": list(s.spam_patterns_found) if s.spam_patterns_found is not None else None,
            "has_schema_org": s.has_structured_data,
            "has_author": s.has_author_signal,
            "has_date": s.has_date_signal,
            "has_about_link": s.has_about_link,
            "has_contact_link": s.has_contact_link,
            "has_policy_links": s.has_policy_links,
            "ad_hint_count": s.ad_hint_count,
            "interstitial_hint": s.has_interstitial_hint,
            "ymyl_risk": s.ymyl_risk,
            "ymyl_categories": list(s.ymyl_categories) if s.ymyl_categories is not None else None,
            "purpose_guess": s.purpose_guess,
            "pq_score": self.report.score,
            "pq_bucket": self.report.bucket,
            "red_flags": list(self.report.red_flags),
            "positives": list(self.report.positives),
            "mc_excerpt": s.main_content_excerpt,
            "salt_anchor": self.anchor.to_dict(),
            "facts": self.facts,
            "error": self.error,
        }


def scan_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> ScanResult:
    """Scan one page. A failed fetch or parse degrades to unknown signals."""
    url = normalize_url(url)
    error: Optional[str] = None
    try:
        signals: Optional[SiteSignals] = extract(url, timeout=timeout)
    except ScanError as exc:
        logger.warning("Scan of %s degraded to unknown signals: %s", url, exc)
        signals = None
        error = str(exc)

    scored = signals if signals is not None else SiteSignals.unknown(url)
    report = score_page_quality(scored)
    anchor = compute_anchor(signals)
    return ScanResult(
        url=url,
        signals=scored,
        report=report,
        anchor=anchor,
        facts=build_fact_block(scored, report, anchor),
        error=error,
    )


def score_signals(signals: SiteSignals) -> Dict[str, Any]:
    """Score an already measured signal set without fetching anything."""
    report = score_page_quality(signals)
    anchor = compute_anchor(signals)
    return {"report": report.to_dict(), "salt_anchor": anchor.to_dict()}
