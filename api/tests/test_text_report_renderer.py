"""
Tests for the plain-text violations report.
"""

from services.report_aggregator import generate_compliance_report
from services.text_report_renderer import BANNER, EMPTY_REPORT_TEXT, RULE, format_report_as_text


def test_empty_report_text():
    assert format_report_as_text([]) == "COMPLIANCE REPORT\n\nNo properties with violations found."
    assert format_report_as_text([]) == EMPTY_REPORT_TEXT


def test_banners_are_sixty_characters():
    assert BANNER == "=" * 60
    assert RULE == "-" * 60


class TestFormatReportAsText:
    """Test suite for text report rendering."""

    def test_header(self, violating_review, generated_at):
        text = format_report_as_text(generate_compliance_report([violating_review]), generated_at)
        lines = text.splitlines()

        assert lines[0] == "SUNRISE TERRITORY VILLAGE - COMPLIANCE REPORT"
        assert lines[1] == BANNER
        assert lines[2] == "Generated: 3/20/2024, 2:05:09 PM"
        assert lines[3] == "Total properties with violations: 1"

    def test_property_section(self, compliant_review, violating_review, generated_at):
        groups = generate_compliance_report([compliant_review, violating_review])

        text = format_report_as_text(groups, generated_at)

        assert "1. 55 Pine Ave\n" + RULE in text
        assert "Review Team: Smith / Jones" in text
        assert "Review Date: 3/15/2024" in text
        assert "Submitted By: reviewer@stvha.org" in text
        assert "Compliance Status: In Progress" in text
        assert "Photos Attached: 2" in text
        assert "VIOLATIONS FOUND (2):" in text
        assert "  MAJOR ISSUES (1):\n    • Gutters" in text
        assert "  MINOR ISSUES (1):\n    • Mailbox" in text
        assert "COMMENTS:\nDownspout detached on east side." in text
        assert "123 Oak St" not in text

    def test_notice_lines(self, review_factory, generated_at):
        review = review_factory(
            checklist={"doors": "major"},
            violation_notice="yes",
            compliance_deadline="2024-04-15",
        )

        text = format_report_as_text(generate_compliance_report([review]), generated_at)

        assert "⚠️  VIOLATION NOTICE SENT" in text
        assert "   Compliance Deadline: 4/15/2024" in text
        assert "   Date:" not in text

    def test_no_notice_block_without_notice(self, violating_review, generated_at):
        text = format_report_as_text(generate_compliance_report([violating_review]), generated_at)
        assert "VIOLATION NOTICE SENT" not in text

    def test_summary_block(self, violating_review, review_factory, generated_at):
        groups = generate_compliance_report([
            violating_review,
            review_factory("7 Maple St", checklist={"doors": "minor", "driveway": "minor"}),
        ])

        text = format_report_as_text(groups, generated_at)

        assert text.endswith("Violation Notices Sent: 0\n")
        assert f"{BANNER}\nSUMMARY STATISTICS\n{BANNER}" in text
        assert "Total Properties with Violations: 2" in text
        assert "Total Violations Found: 4" in text
        assert "Properties with Major Issues: 1" in text
        assert "Properties with Photos: 1" in text

    def test_unrecognized_entries_listed_as_minor(self, review_factory, generated_at):
        review = review_factory(checklist={"fencing": "severe"})

        text = format_report_as_text(generate_compliance_report([review]), generated_at)

        assert "  MINOR ISSUES (1):\n    • Fencing" in text
        assert "MAJOR ISSUES" not in text
