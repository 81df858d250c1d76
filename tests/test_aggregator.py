from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

import geo_validator.aggregator as aggregator
from geo_validator.aggregator import analyze, analyze_failure, analyze_html
from geo_validator.checks import CHECKS
from geo_validator.models import ALARM, INFO, OK, STATUS_ICONS, report_to_dict

MIXED_PAGE = """<html><head><title>Mixed</title>
<script type="application/ld+json">{"@type": "Article"}</script></head>
<body><main><img src="a.png" alt="logo"><img src="b.png"></main></body></html>"""


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def test_complete_page_scores_100(good_page: str) -> None:
    report = analyze(_soup(good_page))
    assert report.score == 100
    assert all(v.status == OK for v in report.verdicts().values())


def test_mixed_page() -> None:
    report = analyze(_soup(MIXED_PAGE))
    assert report.semantic_html.status == INFO
    assert report.metadata.status == INFO
    assert report.structured_data.status == INFO
    assert report.ai_readiness.status == ALARM
    assert report.accessibility.status == INFO
    assert report.crawlability.status == ALARM
    assert report.score == 33


def test_analyze_is_idempotent() -> None:
    doc = _soup(MIXED_PAGE)
    first = analyze(doc)
    second = analyze(doc)
    assert first == second
    assert report_to_dict(first) == report_to_dict(second)


def test_threaded_run_matches_sequential(good_page: str) -> None:
    for html in (good_page, MIXED_PAGE, ""):
        doc = _soup(html)
        assert analyze(doc, workers=4) == analyze(doc)


def test_icons_and_evidence_invariants() -> None:
    for html in (MIXED_PAGE, "<html><body><p>x</p></body></html>"):
        for verdict in analyze(_soup(html)).verdicts().values():
            assert verdict.icon == STATUS_ICONS[verdict.status]
            if verdict.status == OK:
                assert verdict.evidence is None


def test_failure_report_is_uniform_alarm() -> None:
    report = analyze_failure("timeout")
    assert report.score == 0
    verdicts = list(report.verdicts().values())
    assert len(verdicts) == 6
    for verdict in verdicts:
        assert verdict.status == ALARM
        assert "timeout" in verdict.details
        assert verdict.evidence is None
    assert len(set(verdicts)) == 1


def test_crashing_check_is_isolated(monkeypatch: pytest.MonkeyPatch, good_page: str) -> None:
    def boom(soup: BeautifulSoup):
        raise RuntimeError("selector exploded")

    monkeypatch.setitem(CHECKS, "metadata", boom)
    report = analyze(_soup(good_page))
    assert report.metadata.status == ALARM
    assert "selector exploded" in report.metadata.details
    assert report.semantic_html.status == OK
    assert report.score == 83


def test_analyze_html_parses_markup(good_page: str) -> None:
    assert analyze_html(good_page).score == 100


def test_analyze_html_parse_failure_degrades(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_parser(html: str):
        raise ValueError("unreadable markup")

    monkeypatch.setattr(aggregator, "soup_of", broken_parser)
    report = analyze_html("<html>")
    assert report.score == 0
    assert all("unreadable markup" in v.details for v in report.verdicts().values())
