"""
Violation report routes: JSON, HTML and text previews, .docx download and email.
"""

import asyncio
import logging
from datetime import datetime
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from pydantic import BaseModel, Field

from routes.review_routes import get_review_filters
from services.docx_packager import DOCX_MEDIA_TYPE
from services.email_dispatcher import ReportDeliveryError
from services.report_aggregator import summarize_report
from services.report_service import ComplianceReportService
from services.review_filters import ReviewFilters

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
    responses={
        500: {"description": "Report packaging failed"},
        502: {"description": "Report email could not be delivered"}
    }
)
report_service = ComplianceReportService()


class EmailReportRequest(BaseModel):
    """Request body for emailing the violations report"""
    recipient: Optional[str] = Field(
        None,
        description="Recipient address; defaults to the configured board address"
    )


@router.get("/violations",
            response_model=Dict,
            summary="Get violations report data",
            description="Properties with at least one violation, sorted by address, with aggregate totals")
async def get_violations_report(filters: ReviewFilters = Depends(get_review_filters)):
    """Get the grouped violations report as JSON.

    Returns:
        dict: generated_at, summary and the per-property groups
    """
    groups = report_service.load_report(filters)
    return {
        "generated_at": datetime.now().isoformat(),
        "summary": summarize_report(groups).model_dump(),
        "properties": [
            {
                **group.model_dump(mode="json"),
                "major_count": len(group.major_violations),
                "minor_count": len(group.minor_violations),
            }
            for group in groups
        ],
    }


@router.get("/violations.html",
            response_class=HTMLResponse,
            summary="Preview the HTML violations report")
async def get_violations_report_html(filters: ReviewFilters = Depends(get_review_filters)):
    return HTMLResponse(content=report_service.render_html(filters))


@router.get("/violations.txt",
            response_class=PlainTextResponse,
            summary="Preview the plain-text violations report")
async def get_violations_report_text(filters: ReviewFilters = Depends(get_review_filters)):
    return PlainTextResponse(content=report_service.render_text(filters))


@router.get("/violations.docx",
            summary="Download the violations report",
            description="Word document with a title page, summary page and one section per property",
            response_class=Response)
async def download_violations_report(filters: ReviewFilters = Depends(get_review_filters)):
    """Download the violations report as a .docx file.

    Raises:
        HTTPException: 500 if the document could not be packaged
    """
    try:
        filename, content = await asyncio.to_thread(report_service.build_document, filters)
    except Exception as e:
        logger.error(f"Violations document generation failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate violations document"
        )

    return Response(
        content=content,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/violations/email",
             response_model=Dict,
             summary="Email the violations report",
             description="Sends the HTML report with a plain-text fallback to the board or a given recipient")
async def email_violations_report(
    request: Optional[EmailReportRequest] = None,
    filters: ReviewFilters = Depends(get_review_filters)
):
    """Email the violations report.

    Raises:
        HTTPException: 502 if the email could not be delivered
    """
    recipient = request.recipient if request else None
    try:
        result = await report_service.email_report(recipient=recipient, filters=filters)
    except ReportDeliveryError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )
    return {"status": "sent", **result}
