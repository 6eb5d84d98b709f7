"""
HTML rendering of the violations report for email bodies and previews.
"""

from datetime import datetime
from html import escape
from typing import List, Optional, Sequence

from config import settings
from models.violation_report import PropertyViolationGroup, ReportSummary
from services.report_aggregator import summarize_report
from utils.formatting import format_date, format_status, format_time, status_color

MAX_THUMBNAILS = 6


def format_report_as_html(
    groups: Sequence[PropertyViolationGroup],
    generated_at: Optional[datetime] = None
) -> str:
    """Render report groups as a self-contained HTML fragment.

    Args:
        groups: Report groups from generate_compliance_report
        generated_at: Timestamp printed in the header, defaults to now

    Returns:
        str: HTML fragment with inline styles
    """
    if not groups:
        return (
            '<div style="font-family: Arial, sans-serif; padding: 20px;">\n'
            '  <h2 style="color: #2c5282;">Compliance Report</h2>\n'
            '  <p>No properties with violations found.</p>\n'
            '</div>\n'
        )

    generated_at = generated_at or datetime.now()
    summary = summarize_report(groups)

    parts = [
        '<div style="font-family: Arial, sans-serif; padding: 20px; max-width: 800px;">',
        '  <h1 style="color: #2c5282; border-bottom: 3px solid #2c5282; padding-bottom: 10px;">'
        f'{escape(settings.community_name)} - Compliance Report</h1>',
        '  <p style="color: #666; font-size: 14px;">'
        f'Generated on {format_date(generated_at)} at {format_time(generated_at)}</p>',
        '  <p style="background: #fff3cd; border-left: 4px solid #ffc107; padding: 10px; margin: 20px 0;">'
        f'<strong>Total properties with violations: {summary.total_properties}</strong></p>',
    ]

    for index, group in enumerate(groups, start=1):
        parts.append(_render_property(index, group))

    parts.append(_render_summary(summary))
    parts.append(
        '  <p style="margin-top: 30px; color: #718096; font-size: 12px; '
        'border-top: 1px solid #e2e8f0; padding-top: 20px;">'
        f'This report was automatically generated by the {escape(settings.system_name)}.<br/>'
        'For questions or concerns, please contact the HOA Board.</p>'
    )
    parts.append('</div>')
    return "\n".join(parts) + "\n"


def _render_property(index: int, group: PropertyViolationGroup) -> str:
    lines = [
        '  <div style="border: 1px solid #e2e8f0; border-radius: 8px; padding: 20px; margin: 20px 0; background: #fff;">',
        f'    <h2 style="color: #2d3748; margin-top: 0;">{index}. {escape(group.address)}</h2>',
        '    <div style="background: #f7fafc; padding: 15px; border-radius: 5px; margin: 15px 0;">',
        f'      <p style="margin: 5px 0;"><strong>Review Team:</strong> {escape(group.review_team)}</p>',
        f'      <p style="margin: 5px 0;"><strong>Review Date:</strong> {format_date(group.review_date)}</p>',
        f'      <p style="margin: 5px 0;"><strong>Submitted By:</strong> {escape(group.submitted_by)}</p>',
        '      <p style="margin: 5px 0;"><strong>Compliance Status:</strong> '
        f'<span style="background: {status_color(group.compliance_status)}; color: white; '
        'padding: 3px 8px; border-radius: 3px; font-size: 12px;">'
        f'{escape(format_status(group.compliance_status))}</span></p>',
    ]
    if group.has_photos:
        lines.append(f'      <p style="margin: 5px 0;"><strong>Photos Attached:</strong> {group.photo_count}</p>')
    lines.append('    </div>')

    lines.append(
        f'    <h3 style="color: #c53030; margin-top: 20px;">Violations Found ({len(group.violations)}):</h3>'
    )

    major = group.major_violations
    if major:
        lines.append('    <div style="margin: 15px 0;">')
        lines.append(f'      <h4 style="color: #c53030; margin-bottom: 10px;">🔴 Major Issues ({len(major)}):</h4>')
        lines.append('      <ul style="color: #2d3748;">')
        lines.extend(
            f'        <li style="margin: 5px 0;"><strong>{escape(entry.item)}</strong></li>'
            for entry in major
        )
        lines.append('      </ul>')
        lines.append('    </div>')

    minor = group.minor_violations
    if minor:
        lines.append('    <div style="margin: 15px 0;">')
        lines.append(f'      <h4 style="color: #d69e2e; margin-bottom: 10px;">🟡 Minor Issues ({len(minor)}):</h4>')
        lines.append('      <ul style="color: #2d3748;">')
        lines.extend(
            f'        <li style="margin: 5px 0;">{escape(entry.item)}</li>'
            for entry in minor
        )
        lines.append('      </ul>')
        lines.append('    </div>')

    if group.comments:
        lines.append('    <div style="background: #edf2f7; padding: 15px; border-radius: 5px; margin: 15px 0;">')
        lines.append('      <h4 style="margin-top: 0; color: #2d3748;">Comments:</h4>')
        lines.append(f'      <p style="margin: 0; white-space: pre-wrap;">{escape(group.comments)}</p>')
        lines.append('    </div>')

    if group.notice_sent:
        lines.extend(_render_follow_up(group))

    if group.photos:
        lines.extend(_render_photos(group.photos))

    lines.append('  </div>')
    return "\n".join(lines)


def _render_follow_up(group: PropertyViolationGroup) -> List[str]:
    follow_up = group.follow_up
    lines = [
        '    <div style="background: #fed7d7; border-left: 4px solid #c53030; padding: 15px; margin: 15px 0;">',
        '      <p style="margin: 0;"><strong>⚠️ Violation Notice Sent</strong></p>',
    ]
    for label, value in (
        ("Date", follow_up.violation_notice_date),
        ("Compliance Deadline", follow_up.compliance_deadline),
        ("Re-inspection Scheduled", follow_up.reinspection_date),
    ):
        if value:
            lines.append(f'      <p style="margin: 5px 0 0 0;">{label}: {format_date(value)}</p>')
    lines.append('    </div>')
    return lines


def _render_photos(photos: Sequence[str]) -> List[str]:
    lines = [
        '    <div style="margin: 15px 0;">',
        f'      <h4 style="color: #2d3748;">📷 Attached Photos ({len(photos)}):</h4>',
        '      <div style="display: grid; grid-template-columns: repeat(auto-fill, minmax(150px, 1fr)); '
        'gap: 10px; margin-top: 10px;">',
    ]
    for number, url in enumerate(photos[:MAX_THUMBNAILS], start=1):
        src = escape(url, quote=True)
        lines.append(
            '        <div style="border: 1px solid #e2e8f0; border-radius: 5px; overflow: hidden;">'
            f'<a href="{src}" target="_blank" style="display: block;">'
            f'<img src="{src}" alt="Photo {number}" style="width: 100%; height: 150px; object-fit: cover;" />'
            '</a></div>'
        )
    if len(photos) > MAX_THUMBNAILS:
        lines.append(
            '        <div style="background: #edf2f7; border-radius: 5px; display: flex; '
            'align-items: center; justify-content: center; height: 150px;">'
            f'<span style="color: #4a5568; font-weight: bold;">+{len(photos) - MAX_THUMBNAILS} more</span></div>'
        )
    lines.append('      </div>')
    lines.append('    </div>')
    return lines


def _render_summary(summary: ReportSummary) -> str:
    return "\n".join([
        '  <div style="margin-top: 30px; padding: 20px; background: #edf2f7; border-radius: 8px;">',
        '    <h3 style="margin-top: 0; color: #2d3748;">Summary Statistics</h3>',
        '    <ul style="color: #4a5568;">',
        f'      <li>Total Properties with Violations: {summary.total_properties}</li>',
        f'      <li>Total Violations Found: {summary.total_violations}</li>',
        f'      <li>Properties with Major Issues: {summary.properties_with_major}</li>',
        f'      <li>Properties with Photos: {summary.properties_with_photos}</li>',
        f'      <li>Violation Notices Sent: {summary.notices_sent}</li>',
        '    </ul>',
        '  </div>',
    ])
