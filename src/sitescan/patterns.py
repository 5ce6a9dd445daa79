"""Keyword and pattern tables shared by the extractor.

All tables are read-only; order matters where a table drives a cascade.
"""

from __future__ import annotations

import re
from typing import Dict, Pattern, Tuple

YMYL_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "health_safety": (
        "symptoms",
        "diagnosis",
        "treatment",
        "medication",
        "prescription",
        "emergency",
        "mental health",
        "suicide",
        "addiction",
        "therapy",
    ),
    "finance": (
        "invest",
        "portfolio",
        "stock",
        "crypto",
        "loan",
        "mortgage",
        "credit",
        "insurance",
        "tax",
        "retirement",
        "financial advice",
    ),
    "legal_civics": (
        "lawyer",
        "attorney",
        "legal advice",
        "lawsuit",
        "contract",
        "immigration",
        "vote",
        "election",
        "government benefits",
    ),
}

# (minimum total hits, risk level), highest first
YMYL_RISK_TIERS: Tuple[Tuple[int, str], ...] = (
    (6, "high"),
    (2, "medium"),
)
YMYL_DEFAULT_RISK = "low"

SPAM_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"as an ai language model", re.I),
    re.compile(r"knowledge cutoff", re.I),
    re.compile(r"lorem ipsum", re.I),
    re.compile(r"casino.*bonus", re.I),
    re.compile(r"viagra|cialis", re.I),
)

AD_HINTS = (
    "sponsored",
    "advertisement",
    "adserv",
    "doubleclick",
    "googlesyndication",
    "affiliate",
    "utm_",
    "taboola",
    "outbrain",
)

INTERSTITIAL_HINTS = (
    "subscribe to continue",
    "disable your ad blocker",
    "accept cookies",
    "modal",
    "overlay",
    "interstitial",
)

FILLER_HINTS = (
    "in conclusion",
    "overall,",
    "to sum up",
    "as mentioned above",
    "we hope this helps",
    "this article will discuss",
)

ABOUT_HINTS = ("about", "about-us", "company", "team", "leadership")
CONTACT_HINTS = ("contact", "contact-us", "support", "help", "customer service")
POLICY_HINTS = ("privacy", "terms", "refund", "returns", "shipping", "policies")

# First match wins. The blog check runs on the URL path after these.
PURPOSE_RULES: Tuple[Tuple[Pattern[str], str], ...] = (
    (re.compile(r"buy|pricing|add to cart|checkout|shop|order now"), "commerce / selling a product or service"),
    (re.compile(r"contact|book|schedule|call us|get a quote|request a demo"), "lead-gen / service inquiry"),
    (re.compile(r"news|breaking|report|press release"), "news / announcement"),
    (re.compile(r"how to|guide|tutorial|what is|explained"), "informational / educational"),
)
PURPOSE_BLOG = "blog / informational"
PURPOSE_UNCLEAR = "mixed / unclear"

AUTHOR_BYLINE_RE = re.compile(r"\bby\s+[A-Z][a-z]+(\s+[A-Z][a-z]+){0,3}\b")
NUMERIC_DATE_RE = re.compile(r"\b(20\d{2}|19\d{2})[-/.](0?[1-9]|1[0-2])[-/.](0?[1-9]|[12]\d|3[01])\b")
TEXT_DATE_RE = re.compile(r"\b(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s+\d{1,2},\s+(19|20)\d{2}\b")

NON_CONTENT_TAGS = ("script", "style", "noscript", "nav", "footer", "aside")
MAIN_CONTENT_TAGS = ("main", "article", "body")
HEADING_TAGS = ("h1", "h2", "h3")

REPETITION_NGRAM = 5
REPETITION_MIN_TOKENS = 200
REPETITION_MIN_COUNT = 3

EXCERPT_CHARS = 2000
AUTHOR_WINDOW_CHARS = 2000
PURPOSE_WINDOW_CHARS = 1200
