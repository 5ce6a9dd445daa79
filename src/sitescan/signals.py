from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple

YMYL_LEVELS = ("low", "medium", "high")

TEXT_FIELDS = (
    "requested_url",
    "final_url",
    "title",
    "meta_description",
    "canonical_url",
    "language",
    "ymyl_risk",
    "purpose_guess",
    "main_content_excerpt",
)
COUNT_FIELDS = (
    "http_status",
    "main_content_word_count",
    "heading_count",
    "filler_phrase_hits",
    "ad_hint_count",
    "total_link_count",
    "outbound_link_count",
)
RATIO_FIELDS = ("repetition_score", "link_to_text_ratio")
FLAG_FIELDS = (
    "has_author_signal",
    "has_date_signal",
    "has_structured_data",
    "has_about_link",
    "has_contact_link",
    "has_policy_links",
    "has_interstitial_hint",
)
LIST_FIELDS = ("ymyl_categories", "spam_patterns_found")


def _check_value(name: str, value: Any) -> Any:
    """Validate one incoming field; ``None`` always means unknown."""
    if value is None:
        return None
    if name in TEXT_FIELDS:
        if not isinstance(value, str):
            raise ValueError(f"{name} must be a string")
    elif name in COUNT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"{name} must be a non-negative integer")
    elif name in RATIO_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"{name} must be a non-negative number")
        if name == "repetition_score" and value > 1:
            raise ValueError("repetition_score must be between 0 and 1")
        value = float(value)
    elif name in FLAG_FIELDS:
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be true, false or null")
    elif name in LIST_FIELDS:
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{name} must be a list of strings")
        value = tuple(value)
    return value


@dataclass(frozen=True)
class SiteSignals:
    """Structural and content signals measured from one fetched page.

    ``None`` on any measured field means the value is unknown. Consumers
    skip rules that depend on an unknown value; they never read it as
    zero or false.
    """

    requested_url: str
    final_url: str
    http_status: Optional[int] = None

    title: Optional[str] = None
    meta_description: Optional[str] = None
    canonical_url: Optional[str] = None
    language: Optional[str] = None

    main_content_word_count: Optional[int] = None
    heading_count: Optional[int] = None
    filler_phrase_hits: Optional[int] = None
    repetition_score: Optional[float] = None

    has_author_signal: Optional[bool] = None
    has_date_signal: Optional[bool] = None
    has_structured_data: Optional[bool] = None
    has_about_link: Optional[bool] = None
    has_contact_link: Optional[bool] = None
    has_policy_links: Optional[bool] = None

    ad_hint_count: Optional[int] = None
    has_interstitial_hint: Optional[bool] = None

    total_link_count: Optional[int] = None
    outbound_link_count: Optional[int] = None
    link_to_text_ratio: Optional[float] = None

    ymyl_risk: Optional[str] = None
    ymyl_categories: Optional[Tuple[str, ...]] = None

    purpose_guess: Optional[str] = None
    spam_patterns_found: Optional[Tuple[str, ...]] = None

    main_content_excerpt: str = ""

    @classmethod
    def unknown(cls, url: str) -> "SiteSignals":
        """Placeholder for a scan whose extraction could not run."""
        return cls(requested_url=url, final_url=url)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SiteSignals":
        """Build signals from a JSON-like mapping; unrecognised keys are ignored."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {k: _check_value(k, v) for k, v in data.items() if k in known}
        if not values.get("requested_url"):
            raise ValueError("requested_url is required")
        if not values.get("final_url"):
            values["final_url"] = values["requested_url"]
        risk = values.get("ymyl_risk")
        if risk is not None and risk not in YMYL_LEVELS:
            raise ValueError(f"ymyl_risk must be one of {YMYL_LEVELS}, got {risk!r}")
        values["main_content_excerpt"] = values.get("main_content_excerpt") or ""
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("ymyl_categories", "spam_patterns_found"):
            if data[key] is not None:
                data[key] = list(data[key])
        return data
