"""
Compliance review submission and admin browsing routes.
"""

import logging
from datetime import date, datetime, timezone
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from models.compliance_review import ComplianceReview, ComplianceReviewCreate
from repositories.compliance_review_repository import ComplianceReviewRepository
from services.review_filters import ReviewFilters, apply_filters, review_statistics

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reviews",
    tags=["reviews"],
    responses={404: {"description": "Review not found"}}
)
repo = ComplianceReviewRepository()


def get_review_filters(
    address: Optional[str] = Query(None, description="Address contains (case-insensitive)"),
    team: Optional[str] = Query(None, description="Review team contains (case-insensitive)"),
    date_from: Optional[date] = Query(None, description="Earliest review date (inclusive)"),
    date_to: Optional[date] = Query(None, description="Latest review date (inclusive)"),
    review_status: Optional[str] = Query(
        None,
        alias="status",
        description="Compliance status: resolved, in-progress or further-action"
    ),
    has_images: Optional[bool] = Query(None, description="Only reviews with or without photos")
) -> ReviewFilters:
    """Collect admin filter query parameters."""
    return ReviewFilters(
        address=address,
        team=team,
        date_from=date_from,
        date_to=date_to,
        status=review_status,
        has_images=has_images
    )


@router.post("/",
             response_model=Dict,
             status_code=status.HTTP_201_CREATED,
             summary="Submit a compliance review")
async def submit_review(
    review: ComplianceReviewCreate,
    reviewer_email: str = Header(..., alias="X-Reviewer-Email", description="Submitting reviewer")
):
    """Store a reviewer's checklist, comments, photo links and follow-up.

    Args:
        review: Review form payload
        reviewer_email: Identity of the submitting reviewer

    Returns:
        dict: The stored review

    Raises:
        HTTPException: 500 if the review could not be stored
    """
    record = ComplianceReview(
        **review.model_dump(),
        submitted_by=reviewer_email,
        submitted_at=datetime.now(timezone.utc)
    )

    result = repo.create(record)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store compliance review"
        )

    logger.info(f"Review submitted for {record.property_address} by {reviewer_email}")
    return result


@router.get("/",
            response_model=Dict,
            summary="Browse compliance reviews",
            description="Returns reviews newest first, narrowed by the admin filters, with grid statistics")
async def list_reviews(
    filters: ReviewFilters = Depends(get_review_filters),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of reviews to load; all when omitted")
):
    """List reviews for the admin viewer."""
    reviews = repo.find_reviews(limit=limit)
    filtered = apply_filters(reviews, filters)

    return {
        "reviews": [review.model_dump(mode="json") for review in filtered],
        "statistics": review_statistics(reviews, filtered),
    }


@router.get("/{review_id}",
            response_model=Dict,
            summary="Get a compliance review")
async def get_review(review_id: str):
    """Get a single review by ID.

    Raises:
        HTTPException: 404 if the review does not exist
    """
    node = repo.find_by_id(review_id)
    if not node:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Compliance review {review_id} not found"
        )
    return repo.to_model(node).model_dump(mode="json")
