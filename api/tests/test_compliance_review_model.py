"""
Tests for the compliance review models.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from models.compliance_review import (
    ChecklistValue,
    ComplianceReview,
    ComplianceReviewCreate,
    ComplianceStatus,
    FollowUp,
)


class TestChecklistValue:

    @pytest.mark.parametrize("token,expected", [
        ("accept", ChecklistValue.ACCEPT),
        ("minor", ChecklistValue.MINOR),
        ("major", ChecklistValue.MAJOR),
        ("na", ChecklistValue.NA),
        ("", None),
        (None, None),
        ("MAJOR", ChecklistValue.UNRECOGNIZED),
        ("severe", ChecklistValue.UNRECOGNIZED),
    ])
    def test_parse(self, token, expected):
        assert ChecklistValue.parse(token) is expected

    def test_status_parse(self):
        assert ComplianceStatus.parse("further-action") is ComplianceStatus.FURTHER_ACTION
        assert ComplianceStatus.parse("pending") is None
        assert ComplianceStatus.parse(None) is None


class TestFollowUp:

    @pytest.mark.parametrize("value,expected", [
        ("yes", True),
        ("no", False),
        ("", False),
        (True, True),
        (None, False),
    ])
    def test_notice_flag(self, value, expected):
        assert FollowUp(violationNotice=value).violation_notice is expected


class TestComplianceReview:
    """Test suite for stored review documents."""

    def test_camel_case_document(self):
        review = ComplianceReview.model_validate({
            "propertyAddress": "55 Pine Ave",
            "date": "2024-03-15",
            "reviewTeam": "Smith / Jones",
            "paintStucco": "minor",
            "images": ["a.jpg", "b.jpg"],
            "violationNotice": "yes",
            "complianceDeadline": "2024-04-15",
            "complianceStatus": "resolved",
            "submittedBy": "reviewer@stvha.org",
        })

        assert review.property_address == "55 Pine Ave"
        assert review.review_date == date(2024, 3, 15)
        assert review.paint_stucco == "minor"
        assert review.image_count == 2
        assert review.follow_up.violation_notice is True
        assert review.follow_up.compliance_deadline == date(2024, 4, 15)
        assert review.submitted_by == "reviewer@stvha.org"

    def test_blank_strings_are_unset(self):
        review = ComplianceReview.model_validate({
            "propertyAddress": "  ",
            "gutters": "",
            "date": "",
            "violationNoticeDate": "",
        })

        assert review.property_address is None
        assert review.gutters is None
        assert review.review_date is None
        assert review.follow_up.violation_notice_date is None

    def test_whitespace_checklist_token_is_kept(self):
        review = ComplianceReview.model_validate({"propertyAddress": " ", "gutters": " "})

        assert review.property_address is None
        assert review.gutters == " "
        assert ChecklistValue.parse(review.gutters) is ChecklistValue.UNRECOGNIZED

    def test_nested_follow_up_is_kept(self):
        review = ComplianceReview.model_validate({
            "followUp": {"violationNotice": True, "reinspectionDate": "2024-05-01"},
        })
        assert review.follow_up.reinspection_date == date(2024, 5, 1)

    def test_explicit_image_count_wins(self):
        review = ComplianceReview.model_validate({"images": ["a.jpg"], "imageCount": 3})
        assert review.image_count == 3

    def test_negative_image_count_rejected(self):
        with pytest.raises(ValidationError):
            ComplianceReview.model_validate({"imageCount": -1})

    def test_stored_documents_keep_unknown_tokens(self):
        review = ComplianceReview.model_validate({"gutters": "severe"})
        assert review.gutters == "severe"

    def test_checklist_values_order(self, violating_review):
        values = list(violating_review.checklist_values())

        assert len(values) == 25
        assert values[0][0].label == "Overall Appearance"
        assert dict((item.key, token) for item, token in values)["gutters"] == "major"


class TestComplianceReviewCreate:
    """Test suite for submission validation."""

    def test_valid_submission(self):
        review = ComplianceReviewCreate.model_validate({
            "propertyAddress": "55 Pine Ave",
            "gutters": "major",
            "doors": "na",
            "complianceStatus": "in-progress",
        })
        assert review.gutters == "major"

    def test_unknown_checklist_token_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ComplianceReviewCreate.model_validate({"gutters": "Major"})
        assert "must be one of" in str(exc_info.value)

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            ComplianceReviewCreate.model_validate({"complianceStatus": "done"})
