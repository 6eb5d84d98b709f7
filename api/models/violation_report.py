"""
Report models derived from compliance reviews.

These are rebuilt on every report run and never persisted.
"""

from datetime import date
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field

from models.compliance_review import ChecklistValue, FollowUp


NOT_SPECIFIED = "Not specified"


class Severity(str, Enum):
    MAJOR = "Major"
    MINOR = "Minor"


class ViolationEntry(BaseModel):
    """One non-compliant checklist item on one review."""

    item: str = Field(..., description="Human-readable checklist label")
    severity: Severity
    status: ChecklistValue = Field(
        ...,
        description="Checklist token the entry came from; UNRECOGNIZED marks an unknown token"
    )

    @property
    def is_unrecognized(self) -> bool:
        return self.status is ChecklistValue.UNRECOGNIZED

    class Config:
        frozen = True


class PropertyViolationGroup(BaseModel):
    """All violations found on one review, with the review's metadata.

    Fallback values are applied once when the group is built so renderers
    never have to handle missing fields.
    """

    address: str
    review_team: str
    review_date: Optional[date] = None
    submitted_by: str
    compliance_status: str = NOT_SPECIFIED
    violations: Tuple[ViolationEntry, ...]
    photos: Tuple[str, ...] = ()
    photo_count: int = 0
    comments: str = ""
    follow_up: FollowUp = Field(default_factory=FollowUp)

    @property
    def major_violations(self) -> Tuple[ViolationEntry, ...]:
        return tuple(v for v in self.violations if v.severity is Severity.MAJOR)

    @property
    def minor_violations(self) -> Tuple[ViolationEntry, ...]:
        return tuple(v for v in self.violations if v.severity is Severity.MINOR)

    @property
    def has_major(self) -> bool:
        return any(v.severity is Severity.MAJOR for v in self.violations)

    @property
    def has_photos(self) -> bool:
        return self.photo_count > 0

    @property
    def notice_sent(self) -> bool:
        return self.follow_up.violation_notice

    class Config:
        frozen = True


class ReportSummary(BaseModel):
    """Cross-property totals shared by every report format."""

    total_properties: int = 0
    total_violations: int = 0
    properties_with_major: int = 0
    properties_with_photos: int = 0
    notices_sent: int = 0

    class Config:
        frozen = True
