from dataclasses import replace
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import pytest

from sitescan.quality import bucket_for, score_page_quality
from sitescan.signals import SiteSignals


def make_signals(**overrides) -> SiteSignals:
    base = SiteSignals(
        requested_url="https://acme.test/",
        final_url="https://acme.test/",
        http_status=200,
        title="Acme Industrial Brokerage — Warehouse Leasing",
        meta_description="Industrial and warehouse leasing across Southern California markets.",
        main_content_word_count=1500,
        heading_count=8,
        filler_phrase_hits=0,
        repetition_score=0.05,
        has_author_signal=True,
        has_date_signal=True,
        has_structured_data=True,
        has_about_link=True,
        has_contact_link=True,
        has_policy_links=True,
        ad_hint_count=0,
        has_interstitial_hint=False,
        total_link_count=45,
        outbound_link_count=3,
        link_to_text_ratio=0.03,
        ymyl_risk="low",
        ymyl_categories=(),
        purpose_guess="lead-gen / service inquiry",
        spam_patterns_found=(),
    )
    return replace(base, **overrides)


def test_strong_brokerage_page_scores_highest_without_red_flags():
    report = score_page_quality(make_signals())
    assert report.score == 86
    assert report.score >= 75
    assert report.bucket == "Highest"
    assert report.red_flags == ()
    assert len(report.positives) == 10


def test_without_meta_description_still_high():
    report = score_page_quality(make_signals(meta_description=""))
    assert report.score == 81
    assert "Has a meta description." not in report.positives


def test_content_floor_caps_favourable_page():
    report = score_page_quality(make_signals(main_content_word_count=50))
    assert report.score == 25
    assert report.bucket == "Low"
    assert "Very thin main content." in report.red_flags
    assert report.red_flags[-1] == "Very little usable content; score capped."


def test_spam_allowance_never_goes_negative():
    patterns = ("as an ai language model", "knowledge cutoff", "lorem ipsum", "casino.*bonus", "viagra|cialis")
    report = score_page_quality(make_signals(spam_patterns_found=patterns))
    assert report.score == 66
    assert report.red_flags.count("Spam pattern detected.") == 5


def test_thin_and_repetitive_penalty():
    report = score_page_quality(make_signals(main_content_word_count=220, repetition_score=0.3))
    assert report.score == 70
    assert report.bucket == "High"
    assert report.red_flags == ("Thin + repetitive content.",)


def test_heavy_ads_and_interstitial():
    report = score_page_quality(make_signals(ad_hint_count=6, has_interstitial_hint=True))
    assert report.score == 77
    assert report.red_flags == ("Many ad/monetization hints detected.", "Interstitial/overlay hints detected.")


def test_moderate_ads_cost_two_points_silently():
    report = score_page_quality(make_signals(ad_hint_count=3))
    assert report.score == 84
    assert report.red_flags == ()


def test_ymyl_page_missing_author_and_date():
    report = score_page_quality(make_signals(ymyl_risk="medium", has_author_signal=False, has_date_signal=False))
    assert report.score == 66
    assert report.red_flags == (
        "No author signals detected.",
        "YMYL content with missing author signals.",
        "YMYL content with missing date signals.",
    )


def test_high_link_ratio_is_penalised():
    report = score_page_quality(make_signals(link_to_text_ratio=0.2))
    assert report.score == 78
    assert "High link-to-text ratio." in report.red_flags


def test_score_is_clamped_at_zero():
    report = score_page_quality(
        make_signals(
            title="",
            meta_description="",
            main_content_word_count=300,
            heading_count=0,
            link_to_text_ratio=0.5,
            repetition_score=0.9,
            filler_phrase_hits=5,
            has_structured_data=False,
            has_author_signal=False,
            has_date_signal=False,
            ymyl_risk="high",
            has_about_link=False,
            has_contact_link=False,
            has_policy_links=False,
            ad_hint_count=9,
            has_interstitial_hint=True,
            spam_patterns_found=("lorem ipsum", "knowledge cutoff"),
        )
    )
    assert report.score == 0
    assert report.bucket == "Lowest"
    assert report.positives == ()


def test_unknown_signals_neither_reward_nor_penalise():
    report = score_page_quality(SiteSignals.unknown("https://acme.test/"))
    assert report.score == 0
    assert report.bucket == "Lowest"
    assert report.red_flags == ()
    assert report.positives == ()


def test_unknown_author_is_not_treated_as_missing():
    report = score_page_quality(make_signals(has_author_signal=None, ymyl_risk="high"))
    assert report.score == 80
    assert report.red_flags == ()


def test_scoring_is_deterministic():
    signals = make_signals(ad_hint_count=4, repetition_score=0.4)
    assert score_page_quality(signals) == score_page_quality(signals)


def test_report_flags_cannot_be_mutated():
    report = score_page_quality(make_signals(link_to_text_ratio=0.2))
    assert isinstance(report.red_flags, tuple)
    assert isinstance(report.positives, tuple)
    with pytest.raises(AttributeError):
        report.red_flags.append("extra")
    assert report.to_dict()["red_flags"] == ["High link-to-text ratio."]


@pytest.mark.parametrize(
    "score, bucket",
    [(0, "Lowest"), (19, "Lowest"), (20, "Low"), (39, "Low"), (40, "Medium"), (59, "Medium"), (60, "High"), (79, "High"), (80, "Highest"), (100, "Highest")],
)
def test_bucket_thresholds(score, bucket):
    assert bucket_for(score) == bucket
