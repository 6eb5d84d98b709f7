"""
Filtering of compliance reviews for the admin browser and for scoped reports.
"""

from datetime import date
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from models.compliance_review import ComplianceReview


class ReviewFilters(BaseModel):
    """Admin browse filters. Unset filters match everything."""

    address: Optional[str] = Field(None, description="Case-insensitive substring of the property address")
    team: Optional[str] = Field(None, description="Case-insensitive substring of the review team")
    date_from: Optional[date] = Field(None, description="Earliest review date, inclusive")
    date_to: Optional[date] = Field(None, description="Latest review date, inclusive")
    status: Optional[str] = Field(None, description="Exact compliance status token")
    has_images: Optional[bool] = Field(None, description="Only reviews with (True) or without (False) photos")

    @property
    def is_empty(self) -> bool:
        return all(value is None or value == "" for value in self.model_dump().values())


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


def matches(review: ComplianceReview, filters: ReviewFilters) -> bool:
    """Check a single review against every set filter."""
    if filters.address and not _contains(review.property_address, filters.address):
        return False
    if filters.team and not _contains(review.review_team, filters.team):
        return False
    if filters.date_from and (review.review_date is None or review.review_date < filters.date_from):
        return False
    if filters.date_to and (review.review_date is None or review.review_date > filters.date_to):
        return False
    if filters.status and review.compliance_status != filters.status:
        return False
    if filters.has_images is not None and bool(review.images) != filters.has_images:
        return False
    return True


def apply_filters(
    reviews: Sequence[ComplianceReview],
    filters: Optional[ReviewFilters] = None
) -> List[ComplianceReview]:
    """Return the reviews matching the filters, preserving input order."""
    if filters is None or filters.is_empty:
        return list(reviews)
    return [review for review in reviews if matches(review, filters)]


def review_statistics(
    all_reviews: Sequence[ComplianceReview],
    filtered: Sequence[ComplianceReview]
) -> Dict[str, int]:
    """Counters shown above the admin review grid."""
    return {
        "total_reviews": len(all_reviews),
        "with_images": sum(1 for review in all_reviews if review.images),
        "total_images": sum(review.image_count or 0 for review in all_reviews),
        "showing": len(filtered),
    }
