import pytest

from outliner_lib.models import Block, FontStyle, PageModel, RawSpan, Span
from outliner_lib.params import Params

BODY_FONT = FontStyle("Times-Roman", size=10)
HEADING_FONT = FontStyle("Times-Bold", weight="bold", size=24)


@pytest.fixture
def params():
    return Params()


@pytest.fixture
def make_span():
    """Factory for processed spans with sensible defaults."""

    def _make(x=72, y=100, w=200, h=12, text="Some heading", style="24_Times-Bold_Bo_000000",
              i_page=0, i_block=0, i_span=0, i_col=None):
        return Span(x, y, w, h, text, style, i_page, i_block, i_span, i_col)

    return _make


def body_block(x, y, n_lines, font=BODY_FONT, width=456, line_h=12, leading=14):
    """A paragraph of n_lines full-width body lines."""
    raw = [
        RawSpan(x, y + i * leading, width, line_h, f"Body text line {i} of a paragraph.", font)
        for i in range(n_lines)
    ]
    return Block(x, y, width, (n_lines - 1) * leading + line_h, raw)


def heading_block(text, x, y, font=HEADING_FONT, width=200, h=28):
    return Block(x, y, width, h, [RawSpan(x, y, width, h, text, font)])


@pytest.fixture
def two_page_document():
    """Two pages of 10pt body text, each with one centered 24pt bold heading."""
    page1 = PageModel(
        600,
        800,
        [
            heading_block("Introduction", 200, 100),
            body_block(72, 140, 6),
            body_block(72, 240, 6),
            body_block(72, 340, 6),
        ],
    )
    page2 = PageModel(
        600,
        800,
        [
            body_block(72, 50, 6),
            body_block(72, 150, 6),
            heading_block("Methods", 200, 400),
            body_block(72, 440, 6),
        ],
    )
    return [page1, page2]
