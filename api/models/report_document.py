"""
Logical structure of the downloadable violations document.

The document renderer produces a ReportDocument; the docx packager turns it
into a file. Nothing here knows about the binary format.
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field


MAJOR_COLOR = "C62828"
MINOR_COLOR = "F57C00"
ACCENT_COLOR = "667EEA"
SEPARATOR_COLOR = "CCCCCC"
LINK_COLOR = "0563C1"


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"


class TextRun(BaseModel):
    text: str
    bold: bool = False
    italic: bool = False
    color: Optional[str] = None


class Heading(BaseModel):
    kind: Literal["heading"] = "heading"
    text: str
    level: int = Field(1, ge=1, le=3)
    alignment: Alignment = Alignment.LEFT
    underline_color: Optional[str] = None


class Paragraph(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    runs: List[TextRun] = Field(default_factory=list)
    alignment: Alignment = Alignment.LEFT

    @classmethod
    def plain(cls, text: str, **kwargs) -> "Paragraph":
        alignment = kwargs.pop("alignment", Alignment.LEFT)
        return cls(runs=[TextRun(text=text, **kwargs)], alignment=alignment)

    @classmethod
    def labeled(cls, label: str, value: str) -> "Paragraph":
        return cls(runs=[TextRun(text=label, bold=True), TextRun(text=value)])

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


class DetailsTable(BaseModel):
    kind: Literal["table"] = "table"
    rows: List[Tuple[str, str]]


class NumberedItem(BaseModel):
    kind: Literal["numbered_item"] = "numbered_item"
    number: int
    text: str


class PhotoLink(BaseModel):
    kind: Literal["photo_link"] = "photo_link"
    number: int
    url: str

    @property
    def label(self) -> str:
        return f"Photo {self.number}"


class Separator(BaseModel):
    kind: Literal["separator"] = "separator"
    color: str = SEPARATOR_COLOR


class PageBreak(BaseModel):
    kind: Literal["page_break"] = "page_break"


Block = Union[Heading, Paragraph, DetailsTable, NumberedItem, PhotoLink, Separator, PageBreak]


class ReportDocument(BaseModel):
    """An ordered list of blocks; PageBreak blocks start a new page."""

    title: str
    generated_at: datetime
    blocks: List[Block] = Field(default_factory=list)

    def add(self, *blocks: Block) -> None:
        self.blocks.extend(blocks)

    def pages(self) -> List[List[Block]]:
        """Split the blocks into pages at each PageBreak."""
        pages: List[List[Block]] = [[]]
        for block in self.blocks:
            if isinstance(block, PageBreak):
                pages.append([])
            else:
                pages[-1].append(block)
        return pages

    def blocks_of(self, block_type) -> list:
        return [block for block in self.blocks if isinstance(block, block_type)]
