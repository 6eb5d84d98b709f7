"""
Paginated violations document.

Builds the logical layout of the downloadable report: a title page, a summary
page, one section per property and an end-of-report page. Serialization to a
file is done by services.docx_packager.
"""

from datetime import datetime
from typing import Optional, Sequence

from config import settings
from models.report_document import (
    ACCENT_COLOR,
    MAJOR_COLOR,
    MINOR_COLOR,
    Alignment,
    DetailsTable,
    Heading,
    NumberedItem,
    PageBreak,
    Paragraph,
    PhotoLink,
    ReportDocument,
    Separator,
    TextRun,
)
from models.violation_report import PropertyViolationGroup, ViolationEntry
from services.report_aggregator import summarize_report
from utils.formatting import format_date, format_long_date, format_status, format_timestamp

DOCUMENT_TITLE = "CCR COMPLIANCE VIOLATIONS REPORT"


def build_violations_document(
    groups: Sequence[PropertyViolationGroup],
    generated_at: Optional[datetime] = None
) -> ReportDocument:
    """Lay out the violations report as pages of blocks.

    Args:
        groups: Report groups from generate_compliance_report
        generated_at: Timestamp printed on the title and trailer pages

    Returns:
        ReportDocument: Logical document ready for packaging
    """
    generated_at = generated_at or datetime.now()
    doc = ReportDocument(title=DOCUMENT_TITLE, generated_at=generated_at)

    _add_title_page(doc, len(groups))

    if not groups:
        doc.add(Paragraph.plain("No properties with violations found.", alignment=Alignment.CENTER))
    else:
        doc.add(PageBreak())
        _add_summary_page(doc, groups)
        doc.add(PageBreak())
        for index, group in enumerate(groups, start=1):
            _add_property_section(doc, index, len(groups), group)
            if index < len(groups):
                doc.add(Separator())

    doc.add(PageBreak())
    _add_trailer(doc)
    return doc


def _add_title_page(doc: ReportDocument, total: int) -> None:
    doc.add(
        Heading(text=DOCUMENT_TITLE, level=1, alignment=Alignment.CENTER),
        Paragraph.plain(settings.organization_name, alignment=Alignment.CENTER),
        Paragraph.plain(
            f"Generated: {format_long_date(doc.generated_at)}",
            alignment=Alignment.CENTER
        ),
        Paragraph.plain(
            f"Total Properties with Violations: {total}",
            alignment=Alignment.CENTER
        ),
    )


def _add_summary_page(doc: ReportDocument, groups: Sequence[PropertyViolationGroup]) -> None:
    summary = summarize_report(groups)
    doc.add(
        Heading(text="SUMMARY STATISTICS", level=2),
        Paragraph.labeled("Total Properties with Violations: ", str(summary.total_properties)),
        Paragraph.labeled("Total Violations Found: ", str(summary.total_violations)),
        Paragraph.labeled("Properties with Major Issues: ", str(summary.properties_with_major)),
        Paragraph.labeled("Properties with Photo Documentation: ", str(summary.properties_with_photos)),
        Paragraph.labeled("Violation Notices Sent: ", str(summary.notices_sent)),
    )


def _add_property_section(
    doc: ReportDocument,
    index: int,
    total: int,
    group: PropertyViolationGroup
) -> None:
    doc.add(
        Heading(
            text=f"PROPERTY {index} OF {total}",
            level=2,
            alignment=Alignment.CENTER,
            underline_color=ACCENT_COLOR
        ),
        Heading(text=group.address, level=1, alignment=Alignment.CENTER),
        Heading(text="PROPERTY DETAILS", level=3),
        DetailsTable(rows=[
            ("Review Date:", format_date(group.review_date)),
            ("Review Team:", group.review_team),
            ("Submitted By:", group.submitted_by),
            ("Compliance Status:", format_status(group.compliance_status)),
            ("Photos Available:", f"{group.photo_count} photo(s)"),
        ]),
        Heading(text=f"VIOLATIONS FOUND ({len(group.violations)})", level=3),
    )

    _add_issue_list(doc, "🔴 MAJOR ISSUES", MAJOR_COLOR, group.major_violations)
    _add_issue_list(doc, "🟡 MINOR ISSUES", MINOR_COLOR, group.minor_violations)

    if group.comments:
        doc.add(
            Heading(text="INSPECTOR COMMENTS", level=3),
            Paragraph.plain(group.comments, italic=True),
        )

    if group.photos:
        doc.add(
            Heading(text=f"PROPERTY PHOTOS ({len(group.photos)})", level=3),
            Paragraph.plain("Click on any link below to view the photo in your browser:", italic=True),
        )
        doc.add(*(
            PhotoLink(number=number, url=url)
            for number, url in enumerate(group.photos, start=1)
        ))

    if group.notice_sent:
        follow_up = group.follow_up
        doc.add(
            Heading(text="FOLLOW-UP ACTIONS", level=3),
            Paragraph(runs=[TextRun(text="⚠️ VIOLATION NOTICE SENT", bold=True, color=MAJOR_COLOR)]),
        )
        for label, value in (
            ("Notice Date: ", follow_up.violation_notice_date),
            ("Compliance Deadline: ", follow_up.compliance_deadline),
            ("Re-inspection Date: ", follow_up.reinspection_date),
        ):
            if value:
                doc.add(Paragraph.labeled(label, format_date(value)))


def _add_issue_list(
    doc: ReportDocument,
    title: str,
    color: str,
    entries: Sequence[ViolationEntry]
) -> None:
    if not entries:
        return
    doc.add(Paragraph(runs=[TextRun(text=f"{title} ({len(entries)})", bold=True, color=color)]))
    doc.add(*(
        NumberedItem(number=number, text=entry.item)
        for number, entry in enumerate(entries, start=1)
    ))


def _add_trailer(doc: ReportDocument) -> None:
    doc.add(
        Heading(text="END OF REPORT", level=2, alignment=Alignment.CENTER),
        Paragraph.plain(f"Generated: {format_timestamp(doc.generated_at)}", alignment=Alignment.CENTER),
        Paragraph.plain(settings.organization_name, alignment=Alignment.CENTER),
        Paragraph.plain(settings.system_name, alignment=Alignment.CENTER, italic=True),
    )
