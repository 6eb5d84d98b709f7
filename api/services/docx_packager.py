"""
Word (.docx) packaging of the violations document.

Serializes a ReportDocument with python-docx. Photo links are written as real
hyperlinks; when a PhotoFetcher is supplied each photo is also embedded as a
preview under its link. A photo that cannot be fetched keeps only its link.
"""

import io
import logging
from datetime import datetime
from typing import Optional

from docx import Document
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from config import settings
from models.report_document import (
    LINK_COLOR,
    Alignment,
    DetailsTable,
    Heading,
    NumberedItem,
    PageBreak,
    Paragraph,
    PhotoLink,
    ReportDocument,
    Separator,
)
from services.photo_fetcher import PhotoFetcher

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PIXELS_PER_INCH = 100

_ALIGNMENTS = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
}

# Elements that must follow w:pBdr inside w:pPr.
_PBDR_SUCCESSORS = (
    "w:shd", "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap",
    "w:overflowPunct", "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN",
    "w:bidi", "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind",
    "w:contextualSpacing", "w:mirrorIndents", "w:suppressOverlap", "w:jc",
    "w:textDirection", "w:textAlignment", "w:textboxTightWrap",
    "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr", "w:sectPr", "w:pPrChange",
)


def report_filename(generated_at: datetime) -> str:
    """Download filename, e.g. CCR_Violations_Report_2024-03-15.docx"""
    return f"CCR_Violations_Report_{generated_at.date().isoformat()}.docx"


class DocxPackager:
    """Writes ReportDocument blocks into a Word document."""

    def __init__(self, photo_fetcher: Optional[PhotoFetcher] = None):
        self.photo_fetcher = photo_fetcher
        self.document = None

    def package(self, report: ReportDocument) -> bytes:
        """Serialize the report.

        Args:
            report: Logical document from build_violations_document

        Returns:
            bytes: The .docx file content

        Raises:
            Exception: Any serialization error is logged and re-raised
        """
        try:
            self.document = Document()
            self._setup_document(report)

            for block in report.blocks:
                self._add_block(block)

            buffer = io.BytesIO()
            self.document.save(buffer)
            content = buffer.getvalue()
        except Exception as e:
            logger.error(f"[DocxPackager] Failed to package report: {e}", exc_info=True)
            raise

        logger.info(
            f"[DocxPackager] Packaged {len(report.blocks)} blocks into {len(content)} bytes"
        )
        return content

    def _setup_document(self, report: ReportDocument):
        core_props = self.document.core_properties
        core_props.title = report.title
        core_props.author = settings.organization_name
        core_props.subject = settings.system_name

        section = self.document.sections[0]
        section.top_margin = Inches(0.5)
        section.bottom_margin = Inches(0.5)
        section.left_margin = Inches(0.5)
        section.right_margin = Inches(0.5)

    def _add_block(self, block):
        if isinstance(block, Heading):
            self._add_heading(block)
        elif isinstance(block, Paragraph):
            self._add_paragraph(block)
        elif isinstance(block, DetailsTable):
            self._add_table(block)
        elif isinstance(block, NumberedItem):
            self.document.add_paragraph(f"{block.number}. {block.text}", style="List Bullet")
        elif isinstance(block, PhotoLink):
            self._add_photo(block)
        elif isinstance(block, Separator):
            paragraph = self.document.add_paragraph()
            paragraph.paragraph_format.space_after = Pt(20)
            _set_bottom_border(paragraph, block.color, size=12)
        elif isinstance(block, PageBreak):
            paragraph = self.document.add_paragraph()
            paragraph.paragraph_format.page_break_before = True
        else:
            raise TypeError(f"Unsupported document block: {type(block).__name__}")

    def _add_heading(self, block: Heading):
        heading = self.document.add_heading(block.text, level=block.level)
        heading.alignment = _ALIGNMENTS[block.alignment]
        if block.underline_color:
            _set_bottom_border(heading, block.underline_color, size=6)

    def _add_paragraph(self, block: Paragraph):
        paragraph = self.document.add_paragraph()
        paragraph.alignment = _ALIGNMENTS[block.alignment]
        for text_run in block.runs:
            run = paragraph.add_run(text_run.text)
            run.bold = text_run.bold
            run.italic = text_run.italic
            if text_run.color:
                run.font.color.rgb = RGBColor.from_string(text_run.color)

    def _add_table(self, block: DetailsTable):
        table = self.document.add_table(rows=len(block.rows), cols=2)
        table.style = "Table Grid"
        table.alignment = WD_TABLE_ALIGNMENT.CENTER
        for row, (label, value) in zip(table.rows, block.rows):
            label_cell, value_cell = row.cells
            label_cell.width = Inches(2.25)
            value_cell.width = Inches(5.25)
            label_cell.paragraphs[0].add_run(label).bold = True
            value_cell.paragraphs[0].add_run(value)
        self.document.add_paragraph()

    def _add_photo(self, block: PhotoLink):
        paragraph = self.document.add_paragraph()
        paragraph.add_run(f"{block.number}. ").bold = True
        _add_hyperlink(paragraph, block.url, block.label)
        paragraph.add_run(" - Click to view").italic = True

        if self.photo_fetcher is None:
            return

        blob = self.photo_fetcher.fetch(block.url)
        if blob is None:
            return

        dimensions = self.photo_fetcher.scaled_dimensions(blob)
        preview = self.document.add_paragraph()
        try:
            preview.add_run().add_picture(
                io.BytesIO(blob),
                width=Inches(dimensions.width / PIXELS_PER_INCH)
            )
        except Exception as e:
            preview._p.getparent().remove(preview._p)
            logger.warning(f"[DocxPackager] Skipping preview for {block.url}: {e}")


def _add_hyperlink(paragraph, url: str, text: str):
    """Append an external hyperlink run to a paragraph."""
    r_id = paragraph.part.relate_to(url, RELATIONSHIP_TYPE.HYPERLINK, is_external=True)

    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)

    run = OxmlElement("w:r")
    run_props = OxmlElement("w:rPr")
    color = OxmlElement("w:color")
    color.set(qn("w:val"), LINK_COLOR)
    run_props.append(color)
    underline = OxmlElement("w:u")
    underline.set(qn("w:val"), "single")
    run_props.append(underline)
    run.append(run_props)

    text_element = OxmlElement("w:t")
    text_element.text = text
    run.append(text_element)

    hyperlink.append(run)
    paragraph._p.append(hyperlink)


def _set_bottom_border(paragraph, color: str, size: int):
    paragraph_props = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), str(size))
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), color)
    borders.append(bottom)
    paragraph_props.insert_element_before(borders, *_PBDR_SUCCESSORS)
