"""
Tests for the paginated violations document layout.
"""

from models.report_document import (
    ACCENT_COLOR,
    MAJOR_COLOR,
    MINOR_COLOR,
    DetailsTable,
    Heading,
    NumberedItem,
    PageBreak,
    Paragraph,
    PhotoLink,
    Separator,
)
from services.document_report_renderer import DOCUMENT_TITLE, build_violations_document
from services.report_aggregator import generate_compliance_report


def _texts(blocks):
    return [
        block.text for block in blocks
        if isinstance(block, (Heading, Paragraph))
    ]


class TestBuildViolationsDocument:
    """Test suite for the document renderer."""

    def test_empty_document(self, generated_at):
        doc = build_violations_document([], generated_at)

        pages = doc.pages()
        assert len(pages) == 2
        title_page = _texts(pages[0])
        assert title_page[0] == DOCUMENT_TITLE
        assert "Total Properties with Violations: 0" in title_page
        assert "No properties with violations found." in title_page
        assert _texts(pages[1])[0] == "END OF REPORT"
        assert doc.blocks_of(Separator) == []

    def test_page_layout(self, violating_review, review_factory, generated_at):
        groups = generate_compliance_report([
            violating_review,
            review_factory("7 Maple St", checklist={"doors": "minor"}),
        ])

        doc = build_violations_document(groups, generated_at)
        pages = doc.pages()

        assert len(pages) == 4
        assert len(doc.blocks_of(PageBreak)) == 3
        assert "Sunrise Territory Village Homeowners Association" in _texts(pages[0])
        assert "Generated: March 20, 2024" in _texts(pages[0])
        assert "Total Properties with Violations: 2" in _texts(pages[0])
        assert _texts(pages[1])[0] == "SUMMARY STATISTICS"
        assert _texts(pages[3]) == [
            "END OF REPORT",
            "Generated: 3/20/2024, 2:05:09 PM",
            "Sunrise Territory Village Homeowners Association",
            "CCR Compliance Review System",
        ]

    def test_summary_page(self, violating_review, review_factory, generated_at):
        groups = generate_compliance_report([
            violating_review,
            review_factory("7 Maple St", checklist={"doors": "minor"}, violation_notice="yes"),
        ])

        summary_page = _texts(build_violations_document(groups, generated_at).pages()[1])

        assert summary_page[1:] == [
            "Total Properties with Violations: 2",
            "Total Violations Found: 3",
            "Properties with Major Issues: 1",
            "Properties with Photo Documentation: 1",
            "Violation Notices Sent: 1",
        ]

    def test_separators_between_properties_only(self, review_factory, generated_at):
        groups = generate_compliance_report([
            review_factory(f"{n} Elm Ct", checklist={"doors": "minor"}) for n in range(1, 4)
        ])

        doc = build_violations_document(groups, generated_at)
        property_page = doc.pages()[2]

        assert len(doc.blocks_of(Separator)) == 2
        assert not isinstance(property_page[-1], Separator)
        headings = [b.text for b in property_page if isinstance(b, Heading) and b.text.startswith("PROPERTY ")]
        assert headings[:1] == ["PROPERTY 1 OF 3"]
        assert "PROPERTY 3 OF 3" in headings

    def test_property_section(self, violating_review, generated_at):
        doc = build_violations_document(generate_compliance_report([violating_review]), generated_at)
        section = doc.pages()[2]

        counter = section[0]
        assert counter.text == "PROPERTY 1 OF 1"
        assert counter.underline_color == ACCENT_COLOR
        assert section[1].text == "55 Pine Ave"

        table = next(b for b in section if isinstance(b, DetailsTable))
        assert table.rows == [
            ("Review Date:", "3/15/2024"),
            ("Review Team:", "Smith / Jones"),
            ("Submitted By:", "reviewer@stvha.org"),
            ("Compliance Status:", "In Progress"),
            ("Photos Available:", "2 photo(s)"),
        ]

        texts = _texts(section)
        assert "VIOLATIONS FOUND (2)" in texts
        assert "INSPECTOR COMMENTS" in texts
        assert "Downspout detached on east side." in texts
        assert "PROPERTY PHOTOS (2)" in texts
        assert "FOLLOW-UP ACTIONS" not in texts

    def test_issue_lists_are_colored_and_numbered(self, review_factory, generated_at):
        review = review_factory(checklist={"gutters": "major", "doors": "minor", "mailbox": "minor"})

        doc = build_violations_document(generate_compliance_report([review]), generated_at)

        titles = [
            p.runs[0] for p in doc.blocks_of(Paragraph)
            if p.runs and p.runs[0].text.startswith(("🔴", "🟡"))
        ]
        assert [(r.text, r.color, r.bold) for r in titles] == [
            ("🔴 MAJOR ISSUES (1)", MAJOR_COLOR, True),
            ("🟡 MINOR ISSUES (2)", MINOR_COLOR, True),
        ]
        items = doc.blocks_of(NumberedItem)
        assert [(i.number, i.text) for i in items] == [(1, "Gutters"), (1, "Doors"), (2, "Mailbox")]

    def test_photo_links(self, violating_review, generated_at):
        doc = build_violations_document(generate_compliance_report([violating_review]), generated_at)

        links = doc.blocks_of(PhotoLink)

        assert [link.label for link in links] == ["Photo 1", "Photo 2"]
        assert links[1].url == "https://storage.example.com/compliance-photos/2.jpg"

    def test_follow_up_actions(self, review_factory, generated_at):
        review = review_factory(
            checklist={"gutters": "major"},
            violation_notice="yes",
            violation_notice_date="2024-03-16",
            compliance_deadline="2024-04-15",
            reinspection_date="2024-05-01",
        )

        texts = _texts(build_violations_document(generate_compliance_report([review]), generated_at).blocks)

        start = texts.index("FOLLOW-UP ACTIONS")
        assert texts[start + 1:start + 5] == [
            "⚠️ VIOLATION NOTICE SENT",
            "Notice Date: 3/16/2024",
            "Compliance Deadline: 4/15/2024",
            "Re-inspection Date: 5/1/2024",
        ]
