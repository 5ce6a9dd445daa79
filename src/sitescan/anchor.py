"""SALT anchor scores (Semantic, Authority, Location, Trust).

The anchor is a deterministic starting point that a later generative
scoring pass may only move within ``ANCHOR_SPREAD`` points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .signals import SiteSignals
from .utils import clamp, round_half_up

PILLARS = ("semantic", "authority", "location", "trust")
FALLBACK_SCORE = 50
ANCHOR_SPREAD = 15


@dataclass(frozen=True)
class SaltAnchor:
    overall: int
    semantic: int
    authority: int
    location: int
    trust: int

    @classmethod
    def from_pillars(cls, semantic: float, authority: float, location: float, trust: float) -> "SaltAnchor":
        pillars = [int(clamp(round_half_up(v), 0, 100)) for v in (semantic, authority, location, trust)]
        return cls(round_half_up(sum(pillars) / 4), *pillars)

    @classmethod
    def flat(cls, value: int = FALLBACK_SCORE) -> "SaltAnchor":
        return cls(value, value, value, value, value)

    def pillars(self) -> Dict[str, int]:
        return {p: getattr(self, p) for p in PILLARS}

    def to_dict(self) -> Dict[str, int]:
        return {"overall": self.overall, **self.pillars()}


def _semantic(s: SiteSignals) -> int:
    score = 50
    words = s.main_content_word_count
    if words is not None:
        if words >= 1200:
            score += 20
        elif words >= 500:
            score += 10
        elif words < 200:
            score -= 20
    if s.heading_count is not None and s.heading_count >= 4:
        score += 10
    if s.repetition_score is not None and s.repetition_score > 0.35:
        score -= 15
    return score


def _authority(s: SiteSignals) -> int:
    score = 30
    if s.has_author_signal:
        score += 25
    if s.has_date_signal:
        score += 20
    if s.has_structured_data:
        score += 15
    if s.main_content_word_count is not None and s.main_content_word_count >= 800:
        score += 10
    return score


def _trust(s: SiteSignals) -> int:
    score = 20
    if s.has_contact_link:
        score += 25
    if s.has_about_link:
        score += 20
    if s.has_policy_links:
        score += 15
    if s.has_structured_data:
        score += 10
    if s.has_author_signal:
        score += 10
    return score


def compute_anchor(signals: Optional[SiteSignals]) -> SaltAnchor:
    if signals is None:
        return SaltAnchor.flat()
    # Location is left to the downstream step, which sees the excerpt.
    return SaltAnchor.from_pillars(_semantic(signals), _authority(signals), FALLBACK_SCORE, _trust(signals))


def bound_to_anchor(value: float, anchor_value: int, spread: int = ANCHOR_SPREAD) -> int:
    lo = max(0, anchor_value - spread)
    hi = min(100, anchor_value + spread)
    return int(clamp(round_half_up(value), lo, hi))


def bound_salt_scores(generated: Mapping[str, float], anchor: SaltAnchor, spread: int = ANCHOR_SPREAD) -> SaltAnchor:
    """Clamp generated pillar scores into the band around ``anchor``.

    Keys are matched case-insensitively; a missing pillar keeps its anchor value.
    """
    lowered = {str(k).lower(): v for k, v in generated.items()}
    bounded = {}
    for pillar, anchor_value in anchor.pillars().items():
        value = lowered.get(pillar)
        bounded[pillar] = anchor_value if value is None else bound_to_anchor(value, anchor_value, spread)
    return SaltAnchor.from_pillars(**bounded)
