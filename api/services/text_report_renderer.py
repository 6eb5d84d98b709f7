"""
Plain-text rendering of the violations report, used as the email fallback body.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from config import settings
from models.violation_report import PropertyViolationGroup, ViolationEntry
from services.report_aggregator import summarize_report
from utils.formatting import format_date, format_status, format_timestamp

WIDTH = 60
BANNER = "=" * WIDTH
RULE = "-" * WIDTH

EMPTY_REPORT_TEXT = "COMPLIANCE REPORT\n\nNo properties with violations found."


def format_report_as_text(
    groups: Sequence[PropertyViolationGroup],
    generated_at: Optional[datetime] = None
) -> str:
    """Render report groups as a fixed-width text report."""
    if not groups:
        return EMPTY_REPORT_TEXT

    generated_at = generated_at or datetime.now()
    summary = summarize_report(groups)

    lines = [
        f"{settings.community_name.upper()} - COMPLIANCE REPORT",
        BANNER,
        f"Generated: {format_timestamp(generated_at)}",
        f"Total properties with violations: {summary.total_properties}",
        BANNER,
        "",
    ]

    for index, group in enumerate(groups, start=1):
        lines.extend(_property_lines(index, group))

    lines.extend([
        "",
        BANNER,
        "SUMMARY STATISTICS",
        BANNER,
        f"Total Properties with Violations: {summary.total_properties}",
        f"Total Violations Found: {summary.total_violations}",
        f"Properties with Major Issues: {summary.properties_with_major}",
        f"Properties with Photos: {summary.properties_with_photos}",
        f"Violation Notices Sent: {summary.notices_sent}",
    ])
    return "\n".join(lines) + "\n"


def _property_lines(index: int, group: PropertyViolationGroup) -> List[str]:
    lines = [
        "",
        f"{index}. {group.address}",
        RULE,
        f"Review Team: {group.review_team}",
        f"Review Date: {format_date(group.review_date)}",
        f"Submitted By: {group.submitted_by}",
        f"Compliance Status: {format_status(group.compliance_status)}",
    ]
    if group.has_photos:
        lines.append(f"Photos Attached: {group.photo_count}")
    lines.append("")

    lines.append(f"VIOLATIONS FOUND ({len(group.violations)}):")
    lines.extend(_issue_lines("MAJOR ISSUES", group.major_violations))
    lines.extend(_issue_lines("MINOR ISSUES", group.minor_violations))

    if group.comments:
        lines.extend(["", "COMMENTS:", group.comments])

    if group.notice_sent:
        follow_up = group.follow_up
        lines.extend(["", "⚠️  VIOLATION NOTICE SENT"])
        if follow_up.violation_notice_date:
            lines.append(f"   Date: {format_date(follow_up.violation_notice_date)}")
        if follow_up.compliance_deadline:
            lines.append(f"   Compliance Deadline: {format_date(follow_up.compliance_deadline)}")
        if follow_up.reinspection_date:
            lines.append(f"   Re-inspection: {format_date(follow_up.reinspection_date)}")

    lines.append("")
    return lines


def _issue_lines(title: str, entries: Sequence[ViolationEntry]) -> List[str]:
    if not entries:
        return []
    return ["", f"  {title} ({len(entries)}):"] + [f"    • {entry.item}" for entry in entries]
