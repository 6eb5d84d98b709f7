"""
Violation extraction and report aggregation.

Turns a flat collection of compliance reviews into the grouped violations
report consumed by the HTML, text and document renderers.
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from models.compliance_review import (
    CHECKLIST_ITEMS,
    ChecklistItem,
    ChecklistValue,
    ComplianceReview,
)
from models.violation_report import (
    NOT_SPECIFIED,
    PropertyViolationGroup,
    ReportSummary,
    Severity,
    ViolationEntry,
)

logger = logging.getLogger(__name__)

ADDRESS_NOT_PROVIDED = "Address not provided"
UNKNOWN = "Unknown"


class ReportCancelledError(Exception):
    """Raised when report generation is cancelled between records."""


def extract_violations(
    review: ComplianceReview,
    items: Sequence[ChecklistItem] = CHECKLIST_ITEMS
) -> List[ViolationEntry]:
    """Collect the non-compliant checklist items of one review.

    Items are visited in checklist order. Empty, ``accept`` and ``na`` values
    are skipped; ``major`` becomes a Major entry and ``minor`` a Minor entry.
    Any other token is reported as a Minor entry flagged UNRECOGNIZED.

    Args:
        review: The compliance review to scan
        items: Checklist items to visit, in display order

    Returns:
        list: Violation entries in checklist order
    """
    violations = []
    for item in items:
        token = getattr(review, item.key)
        value = ChecklistValue.parse(token)

        if value is None or value in (ChecklistValue.ACCEPT, ChecklistValue.NA):
            continue

        if value is ChecklistValue.MAJOR:
            severity = Severity.MAJOR
        elif value is ChecklistValue.MINOR:
            severity = Severity.MINOR
        else:
            logger.warning(
                f"Unrecognized checklist value {token!r} for '{item.label}' "
                f"at {review.property_address or ADDRESS_NOT_PROVIDED}; reporting as Minor"
            )
            severity = Severity.MINOR

        violations.append(ViolationEntry(item=item.label, severity=severity, status=value))
    return violations


def build_group(
    review: ComplianceReview,
    violations: Sequence[ViolationEntry]
) -> PropertyViolationGroup:
    """Build a report group, applying display fallbacks for missing fields."""
    review_date = review.review_date
    if review_date is None and review.submitted_at is not None:
        review_date = review.submitted_at.date()

    return PropertyViolationGroup(
        address=review.property_address or ADDRESS_NOT_PROVIDED,
        review_team=review.review_team or UNKNOWN,
        review_date=review_date,
        submitted_by=review.submitted_by or UNKNOWN,
        compliance_status=review.compliance_status or NOT_SPECIFIED,
        violations=tuple(violations),
        photos=tuple(review.images),
        photo_count=review.image_count or 0,
        comments=review.detailed_comments or "",
        follow_up=review.follow_up,
    )


def generate_compliance_report(
    reviews: Iterable[ComplianceReview],
    should_cancel: Optional[Callable[[], bool]] = None
) -> List[PropertyViolationGroup]:
    """Group violations by property, dropping fully compliant reviews.

    Args:
        reviews: Compliance reviews in any order
        should_cancel: Optional callable checked before each review; when it
            returns True generation stops with ReportCancelledError

    Returns:
        list: One group per review with at least one violation, sorted by
        address (case-insensitive, stable for equal addresses)
    """
    groups = []
    examined = 0
    for review in reviews:
        if should_cancel is not None and should_cancel():
            raise ReportCancelledError(
                f"Report generation cancelled after {examined} reviews"
            )
        examined += 1

        violations = extract_violations(review)
        if not violations:
            continue
        groups.append(build_group(review, violations))

    groups.sort(key=lambda group: group.address.casefold())
    logger.info(f"Compliance report: {len(groups)} of {examined} reviews have violations")
    return groups


def summarize_report(groups: Sequence[PropertyViolationGroup]) -> ReportSummary:
    """Compute the aggregate numbers printed at the end of every report."""
    return ReportSummary(
        total_properties=len(groups),
        total_violations=sum(len(group.violations) for group in groups),
        properties_with_major=sum(1 for group in groups if group.has_major),
        properties_with_photos=sum(1 for group in groups if group.has_photos),
        notices_sent=sum(1 for group in groups if group.notice_sent),
    )
