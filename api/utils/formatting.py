"""
Display helpers shared by the report renderers.
"""

from datetime import date, datetime
from typing import Optional

from models.compliance_review import ComplianceStatus


STATUS_COLORS = {
    ComplianceStatus.RESOLVED: "#48bb78",
    ComplianceStatus.IN_PROGRESS: "#ed8936",
    ComplianceStatus.FURTHER_ACTION: "#f56565",
}
DEFAULT_STATUS_COLOR = "#718096"


def format_status(status: Optional[str]) -> str:
    """Title-case a status token: 'further-action' -> 'Further Action'."""
    if not status:
        return "Not specified"
    return " ".join(word[:1].upper() + word[1:] for word in status.split("-"))


def status_color(status: Optional[str]) -> str:
    parsed = ComplianceStatus.parse(status)
    return STATUS_COLORS.get(parsed, DEFAULT_STATUS_COLOR)


def format_date(value: Optional[date], missing: str = "Not provided") -> str:
    """Short US date without zero padding, e.g. 3/5/2024."""
    if value is None:
        return missing
    if isinstance(value, datetime):
        value = value.date()
    return f"{value.month}/{value.day}/{value.year}"


def format_long_date(value: date) -> str:
    """Long US date, e.g. March 5, 2024."""
    return f"{value:%B} {value.day}, {value.year}"


def format_timestamp(value: datetime) -> str:
    """e.g. 3/5/2024, 2:07:09 PM"""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{format_date(value)}, {hour}:{value:%M:%S} {suffix}"


def format_time(value: datetime) -> str:
    return format_timestamp(value).split(", ", 1)[1]
