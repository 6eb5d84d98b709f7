"""
Compliance report service.

Loads reviews from the record store, narrows them with the admin filters,
aggregates violations and hands the result to the requested renderer,
document packager or email dispatcher. Each call works on its own copy of
the data, so concurrent report requests need no coordination.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from config import settings
from models.violation_report import PropertyViolationGroup
from repositories.compliance_review_repository import ComplianceReviewRepository
from services.document_report_renderer import build_violations_document
from services.docx_packager import DocxPackager, report_filename
from services.email_dispatcher import EmailDispatcher
from services.html_report_renderer import format_report_as_html
from services.photo_fetcher import PhotoFetcher
from services.report_aggregator import generate_compliance_report
from services.review_filters import ReviewFilters, apply_filters
from services.text_report_renderer import format_report_as_text

logger = logging.getLogger(__name__)


def report_subject(generated_at: datetime) -> str:
    return f"CCR Compliance Report - {generated_at.date().isoformat()}"


class ComplianceReportService:
    """Builds and delivers violation reports from stored reviews."""

    def __init__(
        self,
        repository: Optional[ComplianceReviewRepository] = None,
        dispatcher: Optional[EmailDispatcher] = None
    ):
        self.repository = repository or ComplianceReviewRepository()
        self.dispatcher = dispatcher or EmailDispatcher()

    def load_report(self, filters: Optional[ReviewFilters] = None) -> List[PropertyViolationGroup]:
        """Aggregate the violations of every stored review matching the filters."""
        reviews = self.repository.find_reviews(limit=None)
        selected = apply_filters(reviews, filters)
        logger.info(f"Generating violations report from {len(selected)} of {len(reviews)} reviews")
        return generate_compliance_report(selected)

    def render_html(
        self,
        filters: Optional[ReviewFilters] = None,
        generated_at: Optional[datetime] = None
    ) -> str:
        return format_report_as_html(self.load_report(filters), generated_at)

    def render_text(
        self,
        filters: Optional[ReviewFilters] = None,
        generated_at: Optional[datetime] = None
    ) -> str:
        return format_report_as_text(self.load_report(filters), generated_at)

    def build_document(
        self,
        filters: Optional[ReviewFilters] = None,
        generated_at: Optional[datetime] = None
    ) -> Tuple[str, bytes]:
        """Build the downloadable .docx report.

        Returns:
            tuple: (filename, file content)
        """
        generated_at = generated_at or datetime.now()
        document = build_violations_document(self.load_report(filters), generated_at)

        fetcher = PhotoFetcher() if settings.embed_photos else None
        try:
            content = DocxPackager(photo_fetcher=fetcher).package(document)
        finally:
            if fetcher is not None:
                fetcher.close()
        return report_filename(generated_at), content

    async def email_report(
        self,
        recipient: Optional[str] = None,
        filters: Optional[ReviewFilters] = None,
        generated_at: Optional[datetime] = None
    ) -> dict:
        """Email the HTML report with its plain-text fallback.

        Raises:
            ReportDeliveryError: If the email cannot be sent
        """
        generated_at = generated_at or datetime.now()
        recipient = recipient or settings.report_recipient
        groups = self.load_report(filters)
        subject = report_subject(generated_at)

        await self.dispatcher.send(
            recipient,
            subject,
            format_report_as_html(groups, generated_at),
            format_report_as_text(groups, generated_at)
        )
        return {
            "recipient": recipient,
            "subject": subject,
            "properties": len(groups),
        }
