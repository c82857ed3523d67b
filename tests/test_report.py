"""Tests for run reports."""

import logging

import pytest

from term_injector.models import InjectionResult, InsertionDetail, PlacementKind
from term_injector.report import (
    format_report_dict,
    format_report_text,
    log_injection_summary,
    placement_counts,
)


@pytest.fixture
def sample_result() -> InjectionResult:
    return InjectionResult(
        final_content="<p>content</p>",
        added_terms=["keyword research", "seo", "crawl budget"],
        failed_terms=["anchor text"],
        initial_coverage=40,
        final_coverage=100,
        insertion_report=[
            InsertionDetail("keyword research", PlacementKind.HEADING, "header injection", 100),
            InsertionDetail("seo", PlacementKind.PARAGRAPH, "This relates directly to {term}.", 50),
            InsertionDetail("crawl budget", PlacementKind.PARAGRAPH, "Start by focusing on {term}.", 35),
        ],
    )


class TestFormatReportText:
    """Tests for text report formatting."""

    def test_sections(self, sample_result):
        report = format_report_text(sample_result, title="Writing Guide")

        assert "NLP TERM INJECTION REPORT" in report
        assert "Document: Writing Guide" in report
        assert "Initial coverage: 40%" in report
        assert "Final coverage: 100%" in report
        assert "Gain: +60 points" in report
        assert "Added: 3" in report
        assert "  - paragraph: 2" in report
        assert "Failed: 1" in report
        assert "anchor text" in report

    def test_insertion_lines(self, sample_result):
        report = format_report_text(sample_result)
        assert "[heading] keyword research (score 100): header injection" in report

    def test_no_insertions(self):
        report = format_report_text(InjectionResult(final_content=""))
        assert "INSERTIONS" not in report


class TestFormatReportDict:
    """Tests for dict report formatting."""

    def test_structure(self, sample_result):
        data = format_report_dict(sample_result)

        assert data["coverage"] == {"initial": 40, "final": 100, "gain": 60}
        assert data["terms"]["added"] == ["keyword research", "seo", "crawl budget"]
        assert data["terms"]["failed"] == ["anchor text"]
        assert data["terms"]["by_placement"] == {"heading": 1, "paragraph": 2}
        assert len(data["insertions"]) == 3
        assert "final_content" not in data


def test_placement_counts(sample_result):
    assert placement_counts(sample_result) == {"heading": 1, "paragraph": 2}


def test_log_injection_summary(sample_result, caplog):
    with caplog.at_level(logging.INFO, logger="term_injector.report"):
        log_injection_summary(sample_result)

    assert "Coverage: 40% -> 100%" in caplog.text
    assert "anchor text" in caplog.text
