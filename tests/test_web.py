from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import pytest

from sitescan import scan as scan_mod
from sitescan import web
from sitescan.errors import FetchError
from sitescan.signals import SiteSignals


@pytest.fixture()
def client():
    app = web.create_app()
    app.config["TESTING"] = True
    return app.test_client()


def test_index_page(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"SALT anchor" in res.data


def test_scan_requires_url(client):
    res = client.post("/api/scan", json={})
    assert res.status_code == 400
    assert res.get_json() == {"error": "url is required"}


def test_scan_returns_degraded_payload(client, monkeypatch):
    def failing_extract(url, timeout):
        assert timeout == web.MAX_TIMEOUT
        raise FetchError("unreachable")

    monkeypatch.setattr(scan_mod, "extract", failing_extract)
    res = client.post("/api/scan", json={"url": "acme.test", "timeout": 120})
    body = res.get_json()
    assert res.status_code == 200
    assert body["error"] == "unreachable"
    assert body["url"] == "https://acme.test/"
    assert body["salt_anchor"]["overall"] == 50


def test_scan_unexpected_error_is_500(client, monkeypatch):
    def broken_extract(url, timeout):
        raise RuntimeError("boom")

    monkeypatch.setattr(scan_mod, "extract", broken_extract)
    res = client.post("/api/scan", json={"url": "https://acme.test/"})
    assert res.status_code == 500
    assert res.get_json() == {"error": "boom"}


def test_score_endpoint_scores_without_fetching(client):
    signals = SiteSignals(
        requested_url="https://acme.test/",
        final_url="https://acme.test/",
        title="Acme Industrial Brokerage",
        main_content_word_count=50,
        has_author_signal=True,
        has_contact_link=True,
        has_structured_data=True,
        ymyl_categories=("finance",),
    )
    res = client.post("/api/score", json=signals.to_dict())
    body = res.get_json()
    assert res.status_code == 200
    assert body["report"]["score"] <= 25
    assert "Very little usable content; score capped." in body["report"]["red_flags"]
    assert body["salt_anchor"]["semantic"] == 30


def test_score_endpoint_validates_payload(client):
    assert client.post("/api/score", json={"title": "x"}).status_code == 400
    assert client.post("/api/score", json={"requested_url": "https://a.test/", "ymyl_risk": "extreme"}).status_code == 400
    assert client.post("/api/score", data="nope", content_type="text/plain").status_code == 400


@pytest.mark.parametrize(
    "field, value",
    [
        ("has_structured_data", "false"),
        ("has_policy_links", 1),
        ("main_content_word_count", "1500"),
        ("main_content_word_count", True),
        ("heading_count", -2),
        ("heading_count", 2.5),
        ("link_to_text_ratio", "0.03"),
        ("repetition_score", 1.5),
        ("spam_patterns_found", "lorem"),
        ("ymyl_categories", ["finance", 3]),
        ("title", 42),
    ],
)
def test_score_endpoint_rejects_mistyped_fields(client, field, value):
    res = client.post("/api/score", json={"requested_url": "https://acme.test/", field: value})
    assert res.status_code == 400
    assert field in res.get_json()["error"]


def test_score_endpoint_accepts_nulls_and_integer_ratios(client):
    payload = {
        "requested_url": "https://acme.test/",
        "has_structured_data": None,
        "link_to_text_ratio": 0,
        "spam_patterns_found": [],
    }
    res = client.post("/api/score", json=payload)
    body = res.get_json()
    assert res.status_code == 200
    assert body["report"]["positives"] == []
    assert body["report"]["score"] == 22


def test_sanitize_timeout():
    assert web.sanitize_timeout(None) == 15.0
    assert web.sanitize_timeout("-1") == 15.0
    assert web.sanitize_timeout("5") == 5.0
    assert web.sanitize_timeout(90) == web.MAX_TIMEOUT
