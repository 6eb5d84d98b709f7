"""
Compliance review (inspection record) models.

A compliance review is one reviewer's visit to one property: a fixed checklist
of exterior items, free-text comments, photo links, and a follow-up block.
Documents arrive either with the camelCase keys written by the review form or
with the snake_case property names used in the graph store; both are accepted.
"""

from datetime import date, datetime
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator


class ChecklistValue(str, Enum):
    """Condition recorded for a single checklist item."""
    ACCEPT = "accept"
    MINOR = "minor"
    MAJOR = "major"
    NA = "na"
    # Any other non-empty token; reported as a Minor violation
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, token: Optional[str]) -> Optional["ChecklistValue"]:
        """Classify a raw token; returns None for an empty or unset value."""
        if token is None or token == "":
            return None
        for member in (cls.ACCEPT, cls.MINOR, cls.MAJOR, cls.NA):
            if token == member.value:
                return member
        return cls.UNRECOGNIZED


class ComplianceStatus(str, Enum):
    """Follow-up status assigned by the reviewer."""
    RESOLVED = "resolved"
    IN_PROGRESS = "in-progress"
    FURTHER_ACTION = "further-action"

    @classmethod
    def parse(cls, token: Optional[str]) -> Optional["ComplianceStatus"]:
        try:
            return cls(token)
        except ValueError:
            return None


class ChecklistItem(NamedTuple):
    key: str
    document_key: str
    label: str


# Order matters: violations are listed in this order in every report format.
CHECKLIST_ITEMS: Tuple[ChecklistItem, ...] = (
    ChecklistItem("overall_appearance", "overallAppearance", "Overall Appearance"),
    ChecklistItem("paint_stucco", "paintStucco", "Paint/Stucco"),
    ChecklistItem("tile_roof", "tileRoof", "Tile Roof"),
    ChecklistItem("gutters", "gutters", "Gutters"),
    ChecklistItem("windows", "windows", "Windows"),
    ChecklistItem("doors", "doors", "Doors"),
    ChecklistItem("fencing", "fencing", "Fencing"),
    ChecklistItem("driveway", "driveway", "Driveway"),
    ChecklistItem("walkways", "walkways", "Walkways"),
    ChecklistItem("landscape_overall", "landscapeOverall", "Landscape Overall"),
    ChecklistItem("ground_cover", "groundCover", "Ground Cover"),
    ChecklistItem("trees_shrubs", "treesShrubs", "Trees & Shrubs"),
    ChecklistItem("dead_plants", "deadPlants", "Dead Plants"),
    ChecklistItem("mistletoe", "mistletoe", "Mistletoe"),
    ChecklistItem("rocks_gravel", "rocksGravel", "Rocks/Gravel"),
    ChecklistItem("mailbox", "mailbox", "Mailbox"),
    ChecklistItem("lamppost", "lamppost", "Lamppost"),
    ChecklistItem("house_numbers", "houseNumbers", "House Numbers"),
    ChecklistItem("exterior_lighting", "exteriorLighting", "Exterior Lighting"),
    ChecklistItem("trash_debris", "trashDebris", "Trash/Debris"),
    ChecklistItem("trash_cans", "trashCans", "Trash Cans"),
    ChecklistItem("unauthorized_structures", "unauthorizedStructures", "Unauthorized Structures"),
    ChecklistItem("inoperable_vehicles", "inoperableVehicles", "Inoperable Vehicles"),
    ChecklistItem("commercial_vehicles", "commercialVehicles", "Commercial Vehicles"),
    ChecklistItem("approved_parking", "approvedParking", "Approved Parking"),
)

# Follow-up keys live at the top level of stored documents.
_FOLLOW_UP_KEYS = {
    "violationNotice", "violation_notice",
    "violationNoticeDate", "violation_notice_date",
    "complianceDeadline", "compliance_deadline",
    "reinspectionDate", "reinspection_date",
}

# Checklist tokens are kept verbatim apart from the empty string.
_CHECKLIST_KEYS = {
    key
    for item in CHECKLIST_ITEMS
    for key in (item.key, item.document_key)
}


def _is_blank(key, value) -> bool:
    if not isinstance(value, str):
        return False
    if key in _CHECKLIST_KEYS:
        return value == ""
    return not value.strip()


class FollowUp(BaseModel):
    """Violation notice and re-inspection tracking for a review."""

    violation_notice: bool = Field(
        False,
        alias="violationNotice",
        description="Whether a violation notice was sent to the owner"
    )
    violation_notice_date: Optional[date] = Field(None, alias="violationNoticeDate")
    compliance_deadline: Optional[date] = Field(None, alias="complianceDeadline")
    reinspection_date: Optional[date] = Field(None, alias="reinspectionDate")

    @field_validator("violation_notice", mode="before")
    @classmethod
    def parse_notice_flag(cls, v):
        """The review form records the notice as 'yes'/'no'."""
        if isinstance(v, str):
            return v.strip().lower() in ("yes", "true", "1")
        return bool(v)

    class Config:
        populate_by_name = True
        frozen = True


class ComplianceReviewBase(BaseModel):
    """Fields entered on the review form."""

    property_address: Optional[str] = Field(
        None,
        alias="propertyAddress",
        description="Street address of the reviewed property",
        examples=["123 Oak St"]
    )
    review_date: Optional[date] = Field(
        None,
        alias="date",
        description="Date the property was reviewed",
        examples=["2024-03-15"]
    )
    review_team: Optional[str] = Field(
        None,
        alias="reviewTeam",
        description="Free-text names of the reviewers"
    )

    # Checklist
    overall_appearance: Optional[str] = Field(None, alias="overallAppearance")
    paint_stucco: Optional[str] = Field(None, alias="paintStucco")
    tile_roof: Optional[str] = Field(None, alias="tileRoof")
    gutters: Optional[str] = Field(None, alias="gutters")
    windows: Optional[str] = Field(None, alias="windows")
    doors: Optional[str] = Field(None, alias="doors")
    fencing: Optional[str] = Field(None, alias="fencing")
    driveway: Optional[str] = Field(None, alias="driveway")
    walkways: Optional[str] = Field(None, alias="walkways")
    landscape_overall: Optional[str] = Field(None, alias="landscapeOverall")
    ground_cover: Optional[str] = Field(None, alias="groundCover")
    trees_shrubs: Optional[str] = Field(None, alias="treesShrubs")
    dead_plants: Optional[str] = Field(None, alias="deadPlants")
    mistletoe: Optional[str] = Field(None, alias="mistletoe")
    rocks_gravel: Optional[str] = Field(None, alias="rocksGravel")
    mailbox: Optional[str] = Field(None, alias="mailbox")
    lamppost: Optional[str] = Field(None, alias="lamppost")
    house_numbers: Optional[str] = Field(None, alias="houseNumbers")
    exterior_lighting: Optional[str] = Field(None, alias="exteriorLighting")
    trash_debris: Optional[str] = Field(None, alias="trashDebris")
    trash_cans: Optional[str] = Field(None, alias="trashCans")
    unauthorized_structures: Optional[str] = Field(None, alias="unauthorizedStructures")
    inoperable_vehicles: Optional[str] = Field(None, alias="inoperableVehicles")
    commercial_vehicles: Optional[str] = Field(None, alias="commercialVehicles")
    approved_parking: Optional[str] = Field(None, alias="approvedParking")

    detailed_comments: Optional[str] = Field(None, alias="detailedComments")

    # Photos
    images: List[str] = Field(
        default_factory=list,
        description="Photo URLs in upload order"
    )
    image_count: Optional[int] = Field(
        None,
        ge=0,
        alias="imageCount",
        description="Number of photos attached; defaults to the number of image URLs"
    )

    # Follow-up
    follow_up: FollowUp = Field(default_factory=FollowUp, alias="followUp")
    compliance_status: Optional[str] = Field(
        None,
        alias="complianceStatus",
        description="resolved, in-progress or further-action"
    )

    @model_validator(mode="before")
    @classmethod
    def normalize_document(cls, data):
        """Blank strings become unset and flat follow-up keys are nested.

        Whitespace-only checklist tokens are kept so they are reported.
        """
        if not isinstance(data, dict):
            return data

        data = {
            key: (None if _is_blank(key, value) else value)
            for key, value in data.items()
        }

        if "follow_up" not in data and "followUp" not in data:
            follow_up = {
                key: data.pop(key)
                for key in list(data)
                if key in _FOLLOW_UP_KEYS
            }
            follow_up = {k: v for k, v in follow_up.items() if v is not None}
            if follow_up:
                data["follow_up"] = follow_up
        return data

    @field_validator("images", mode="before")
    @classmethod
    def default_images(cls, v):
        return [] if v is None else v

    @model_validator(mode="after")
    def default_image_count(self):
        if self.image_count is None:
            self.image_count = len(self.images)
        return self

    def checklist_values(self) -> Iterator[Tuple[ChecklistItem, Optional[str]]]:
        """Yield each checklist item with its raw token, in checklist order."""
        for item in CHECKLIST_ITEMS:
            yield item, getattr(self, item.key)

    class Config:
        populate_by_name = True


class ComplianceReviewCreate(ComplianceReviewBase):
    """Payload submitted by a reviewer.

    Unlike stored documents, new submissions must use the known checklist and
    status tokens.
    """

    @field_validator(*(item.key for item in CHECKLIST_ITEMS))
    @classmethod
    def validate_checklist_token(cls, v: Optional[str]) -> Optional[str]:
        if ChecklistValue.parse(v) is ChecklistValue.UNRECOGNIZED:
            raise ValueError("must be one of: accept, minor, major, na")
        return v

    @field_validator("compliance_status")
    @classmethod
    def validate_status_token(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and ComplianceStatus.parse(v) is None:
            raise ValueError("must be one of: resolved, in-progress, further-action")
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "date": "2024-03-15",
                "reviewTeam": "Smith / Jones",
                "propertyAddress": "55 Pine Ave",
                "gutters": "major",
                "mailbox": "minor",
                "driveway": "accept",
                "detailedComments": "Downspout detached on east side.",
                "images": ["https://storage.example.com/compliance-photos/1.jpg"],
                "violationNotice": "yes",
                "violationNoticeDate": "2024-03-16",
                "complianceDeadline": "2024-04-15",
                "complianceStatus": "in-progress"
            }
        }


class ComplianceReview(ComplianceReviewBase):
    """A stored compliance review."""

    id: Optional[str] = Field(None, description="Record store identifier")
    submitted_by: Optional[str] = Field(
        None,
        alias="submittedBy",
        description="Identity of the submitting reviewer"
    )
    submitted_at: Optional[datetime] = Field(
        None,
        alias="submittedAt",
        description="When the review was submitted"
    )
