# --- outliner_lib/models.py ---
"""
outliner_lib/models.py: Data models for the span-level view of a document.

All coordinates are in pt with a top-left page origin (y grows downward).
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class FontStyle:
    """Rendering attributes of a run of text."""

    name: str
    family: str = "serif"  # serif, sans-serif, monospace
    weight: str = "normal"  # normal, bold
    style: str = "normal"  # normal, italic
    size: float = 10
    color: int = 0  # 0xRRGGBB


@dataclass
class RawSpan:
    """A contiguous run of text with identical font, as extracted."""

    x: float
    y: float
    w: float
    h: float
    text: str
    font: FontStyle


@dataclass(eq=False)
class Span:
    """A span after intra-block merging, tagged with its position in the document."""

    x: float
    y: float
    w: float
    h: float
    text: str
    style_str: str
    i_page: int = -1
    i_block: int = -1
    i_span: int = -1
    i_col: Optional[int] = None

    @property
    def key(self):
        return self.i_page, self.i_block, self.i_span


@dataclass(eq=False)
class Block:
    """One layout block of a page, e.g. a paragraph or a heading."""

    x: float
    y: float
    w: float
    h: float
    raw_spans: List[RawSpan] = field(default_factory=list)
    spans: List[Span] = field(default_factory=list)
    main_style_str: Optional[str] = None
    n_lines: int = 0


@dataclass(eq=False)
class PageModel:
    """The block structure of a single page."""

    width: float
    height: float
    blocks: List[Block] = field(default_factory=list)


@dataclass
class Column:
    """A vertical alignment band found from body-text blocks."""

    x_left_bin: float
    x_mid_bin: float
    x0: float = 0
    y0: float = 0
    x1: float = 0
    y1: float = 0
    area: float = 0

    def __str__(self):
        return f"(l={self.x_left_bin:g},m={self.x_mid_bin:g})"


@dataclass
class OutlineItem:
    """One heading entry of the final outline."""

    level: int
    text: str
    page: int  # 1-based
    x: Optional[float] = None
    y: Optional[float] = None


# Style signature -> spans sharing it
StyleGroups = Dict[str, List[Span]]
