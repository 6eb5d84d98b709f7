"""
Shared pytest configuration for all tests.
Sets up test settings and common review fixtures.
"""
import os
import struct
import sys
import zlib
from datetime import date, datetime, timezone
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load test environment variables before any imports
from dotenv import load_dotenv

test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)
else:
    # Fallback to hardcoded test values if .env.test doesn't exist
    os.environ["NEO4J_URI"] = "bolt://localhost:7688"
    os.environ["NEO4J_USER"] = "neo4j"
    os.environ["NEO4J_PASSWORD"] = "testpassword123"
    os.environ["API_KEY"] = "test-api-key"
    os.environ["SMTP_USER"] = ""
    os.environ["SMTP_PASSWORD"] = ""
    os.environ["EMBED_PHOTOS"] = "false"

import pytest

from models.compliance_review import CHECKLIST_ITEMS, ComplianceReview


GENERATED_AT = datetime(2024, 3, 20, 14, 5, 9)


def make_review(address="123 Oak St", checklist=None, **fields) -> ComplianceReview:
    """Build a review with every checklist item accepted, then apply overrides."""
    document = {item.key: "accept" for item in CHECKLIST_ITEMS}
    document.update(checklist or {})
    document.setdefault("property_address", address)
    document.setdefault("review_date", date(2024, 3, 15))
    document.setdefault("review_team", "Smith / Jones")
    document.setdefault("submitted_by", "reviewer@stvha.org")
    document.setdefault("submitted_at", datetime(2024, 3, 15, 18, 30, tzinfo=timezone.utc))
    document.update(fields)
    return ComplianceReview.model_validate(document)


@pytest.fixture
def generated_at():
    return GENERATED_AT


@pytest.fixture
def compliant_review():
    """Record A: every checklist item accepted."""
    return make_review("123 Oak St")


@pytest.fixture
def violating_review():
    """Record B: one major and one minor violation, two photos."""
    return make_review(
        "55 Pine Ave",
        checklist={"gutters": "major", "mailbox": "minor"},
        images=[
            "https://storage.example.com/compliance-photos/1.jpg",
            "https://storage.example.com/compliance-photos/2.jpg",
        ],
        detailed_comments="Downspout detached on east side.",
        compliance_status="in-progress",
    )


@pytest.fixture
def review_factory():
    return make_review


def make_png(width=800, height=600) -> bytes:
    """Smallest PNG header python-docx can size."""
    def chunk(kind, data):
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))

    header = struct.pack(">II5B", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IEND", b"")


@pytest.fixture
def png_factory():
    return make_png
