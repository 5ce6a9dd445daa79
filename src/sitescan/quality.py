"""Deterministic page-quality scoring.

Additive points from the extracted signals, clamped to 0..100. Every rule
that fires records a human-readable positive or red flag alongside its
points. Rules whose input is unknown (None) are skipped entirely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .signals import SiteSignals
from .utils import clamp

# (upper bound, exclusive), lowest first
BUCKETS: Tuple[Tuple[int, str], ...] = (
    (20, "Lowest"),
    (40, "Low"),
    (60, "Medium"),
    (80, "High"),
)
TOP_BUCKET = "Highest"

ADS_ALLOWANCE = 10
SPAM_ALLOWANCE = 20
SPAM_PENALTY_PER_PATTERN = 10
THIN_REPETITIVE_PENALTY = 8
CONTENT_FLOOR_WORDS = 80
CONTENT_FLOOR_CAP = 25


@dataclass(frozen=True)
class PageQualityReport:
    score: int
    bucket: str
    red_flags: Tuple[str, ...] = ()
    positives: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "score": self.score,
            "bucket": self.bucket,
            "red_flags": list(self.red_flags),
            "positives": list(self.positives),
        }


def bucket_for(score: int) -> str:
    for upper, label in BUCKETS:
        if score < upper:
            return label
    return TOP_BUCKET


def _ads_score(s: SiteSignals, red_flags: List[str]) -> int:
    if s.ad_hint_count is None or s.has_interstitial_hint is None:
        return 0
    ads = ADS_ALLOWANCE
    if s.ad_hint_count >= 6:
        ads -= 5
        red_flags.append("Many ad/monetization hints detected.")
    elif s.ad_hint_count >= 2:
        ads -= 2
    if s.has_interstitial_hint:
        ads -= 4
        red_flags.append("Interstitial/overlay hints detected.")
    return max(0, ads)


def _spam_score(s: SiteSignals, red_flags: List[str]) -> int:
    if s.spam_patterns_found is None:
        return 0
    penalty = 0
    for _pattern in s.spam_patterns_found:
        penalty += SPAM_PENALTY_PER_PATTERN
        red_flags.append("Spam pattern detected.")
    words = s.main_content_word_count
    if words is not None and s.repetition_score is not None and words < 250 and s.repetition_score > 0.25:
        penalty += THIN_REPETITIVE_PENALTY
        red_flags.append("Thin + repetitive content.")
    return SPAM_ALLOWANCE - min(SPAM_ALLOWANCE, penalty)


def score_page_quality(signals: SiteSignals) -> PageQualityReport:
    s = signals
    score = 0
    red_flags: List[str] = []
    positives: List[str] = []

    if s.title is not None and len(s.title) >= 8:
        score += 5
        positives.append("Has a descriptive title.")
    if s.meta_description is not None and len(s.meta_description) >= 40:
        score += 5
        positives.append("Has a meta description.")

    words = s.main_content_word_count
    if words is not None:
        if words >= 1200:
            score += 12
            positives.append("Substantial content depth.")
        elif words >= 500:
            score += 8
            positives.append("Moderate content depth.")
        elif words >= 200:
            score += 4
        else:
            red_flags.append("Very thin main content.")

    if s.heading_count is not None:
        if s.heading_count >= 6:
            score += 6
            positives.append("Good heading structure.")
        elif s.heading_count >= 2:
            score += 3

    if s.link_to_text_ratio is not None:
        if s.link_to_text_ratio > 0.12:
            score -= 6
            red_flags.append("High link-to-text ratio.")
        elif s.link_to_text_ratio < 0.04:
            score += 2

    if s.repetition_score is not None and s.repetition_score > 0.35:
        score -= 8
        red_flags.append("High repetition (templated content risk).")
    if s.filler_phrase_hits is not None and s.filler_phrase_hits >= 3:
        score -= 4
        red_flags.append("High filler language density.")
    if s.has_structured_data:
        score += 4
        positives.append("Structured data (schema.org) present.")

    if s.has_author_signal is True:
        score += 6
        positives.append("Author signals detected.")
    elif s.has_author_signal is False:
        red_flags.append("No author signals detected.")
    if s.has_date_signal:
        score += 4
        positives.append("Date signals detected.")

    if s.ymyl_risk is not None and s.ymyl_risk != "low":
        if s.has_author_signal is False:
            score -= 6
            red_flags.append("YMYL content with missing author signals.")
        if s.has_date_signal is False:
            score -= 4
            red_flags.append("YMYL content with missing date signals.")

    if s.has_about_link is True:
        score += 4
        positives.append("About/Company link detected.")
    elif s.has_about_link is False:
        red_flags.append("No About/Company link detected.")
    if s.has_contact_link is True:
        score += 6
        positives.append("Contact/Support link detected.")
    elif s.has_contact_link is False:
        red_flags.append("No Contact/Support link detected.")
    if s.has_policy_links:
        score += 2
        positives.append("Policy links detected.")

    score += _ads_score(s, red_flags)
    score += _spam_score(s, red_flags)

    if words is not None and words < CONTENT_FLOOR_WORDS:
        score = min(score, CONTENT_FLOOR_CAP)
        red_flags.append("Very little usable content; score capped.")

    final = int(clamp(score, 0, 100))
    return PageQualityReport(
        score=final, bucket=bucket_for(final), red_flags=tuple(red_flags), positives=tuple(positives)
    )
