from __future__ import annotations

from typing import Any, List, Optional

from .anchor import ANCHOR_SPREAD, SaltAnchor
from .quality import PageQualityReport
from .signals import SiteSignals

FACT_BLOCK_TEMPLATE = """# SITE FACTS (ground truth measured from the live page; do not contradict)

{signals}

# PAGE QUALITY
Score: {score}/100 ({bucket})
Positives: {positives}
Red flags: {red_flags}

# SALT ANCHOR (final scores must stay within +/-{spread} of these)
{anchor}

# MAIN CONTENT EXCERPT
{excerpt}
"""

SIGNAL_LABELS = (
    ("requested_url", "Requested URL"),
    ("final_url", "Final URL"),
    ("http_status", "HTTP status"),
    ("title", "Title"),
    ("meta_description", "Meta description"),
    ("canonical_url", "Canonical URL"),
    ("language", "Language"),
    ("main_content_word_count", "Main content word count"),
    ("heading_count", "Headings (h1-h3)"),
    ("filler_phrase_hits", "Filler phrase hits"),
    ("repetition_score", "Repetition score"),
    ("has_author_signal", "Author signal"),
    ("has_date_signal", "Date signal"),
    ("has_structured_data", "Structured data"),
    ("has_about_link", "About link"),
    ("has_contact_link", "Contact link"),
    ("has_policy_links", "Policy links"),
    ("ad_hint_count", "Ad hints"),
    ("has_interstitial_hint", "Interstitial hint"),
    ("total_link_count", "Total links"),
    ("outbound_link_count", "Outbound links"),
    ("link_to_text_ratio", "Link-to-text ratio"),
    ("ymyl_risk", "YMYL risk"),
    ("ymyl_categories", "YMYL categories"),
    ("purpose_guess", "Purpose guess"),
    ("spam_patterns_found", "Spam patterns"),
)


def format_value(value: Any) -> str:
    if value is None:
        return "unknown"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) or "none"
    if value == "":
        return "(empty)"
    return str(value)


def _anchor_lines(anchor: SaltAnchor, spread: int) -> List[str]:
    lines = [f"Overall: {anchor.overall}"]
    for pillar, value in anchor.pillars().items():
        lo, hi = max(0, value - spread), min(100, value + spread)
        lines.append(f"{pillar.capitalize()}: {value} (allowed {lo}-{hi})")
    return lines


def build_fact_block(
    signals: SiteSignals,
    report: PageQualityReport,
    anchor: SaltAnchor,
    spread: int = ANCHOR_SPREAD,
    excerpt: Optional[str] = None,
) -> str:
    signal_lines = [f"{label}: {format_value(getattr(signals, key))}" for key, label in SIGNAL_LABELS]
    text = excerpt if excerpt is not None else signals.main_content_excerpt
    return FACT_BLOCK_TEMPLATE.format(
        signals="\n".join(signal_lines),
        score=report.score,
        bucket=report.bucket,
        positives="; ".join(report.positives) or "none",
        red_flags="; ".join(report.red_flags) or "none",
        spread=spread,
        anchor="\n".join(_anchor_lines(anchor, spread)),
        excerpt=text or "(no content extracted)",
    )
