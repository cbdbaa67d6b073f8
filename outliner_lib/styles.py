"""
outliner_lib/styles.py: Style signatures and per-block span normalization.
"""
import logging

from .errors import EmptyDocumentError
from .models import Span
from .util import find_max_kv

log_style = logging.getLogger("outliner.style")

SUFFIX_ALL_CAP = "_allCap"
SUFFIX_INLINE = "_inline"


def style_signature(font) -> str:
    """Builds the canonical grouping key for a FontStyle."""
    flags = ""
    if font.family == "sans-serif":
        flags += "Sa"
    if font.family == "monospace":
        flags += "Mo"
    if font.weight == "bold":
        flags += "Bo"
    if font.style == "italic":
        flags += "It"
    return f"{font.size:g}_{font.name}_{flags}_{font.color:06x}"


def style_font_size(style_str) -> float:
    """Reads the font size back out of a (possibly suffixed) signature."""
    return float(style_str.split("_", 1)[0])


def process_block_spans(raw_spans, params):
    """Merges adjacent same-style spans of one block.

    Returns the processed spans and the style covering the largest area.
    """
    spans, style_areas = [], {}
    for raw in raw_spans:
        style_str = style_signature(raw.font)
        style_areas[style_str] = style_areas.get(style_str, 0) + raw.w * raw.h
        prev = spans[-1] if spans else None
        if (
            prev
            and prev.style_str == style_str
            and prev.y == raw.y
            and prev.h == raw.h
            and prev.x + prev.w + params.TOL_JOIN_SPAN >= raw.x
        ):
            prev.text += " " + raw.text
            prev.w = raw.x + raw.w - prev.x
            continue
        spans.append(Span(raw.x, raw.y, raw.w, raw.h, raw.text, style_str))

    main_style = find_max_kv(style_areas)[0] if style_areas else None
    return spans, main_style


def group_text_by_style(pages, params):
    """[STAGE 1] Normalizes every block in place and buckets spans by style."""
    if not pages:
        raise EmptyDocumentError("Document has no pages.")

    style_groups = {}
    for i_page, page in enumerate(pages):
        for i_block, block in enumerate(page.blocks):
            spans, main_style = process_block_spans(block.raw_spans, params)
            for i_span, span in enumerate(spans):
                span.i_page, span.i_block, span.i_span = i_page, i_block, i_span
                style_groups.setdefault(span.style_str, []).append(span)
            block.spans = spans
            block.main_style_str = main_style
            block.n_lines = len({span.y for span in spans})

    if not style_groups:
        raise EmptyDocumentError(f"No text found on any of the {len(pages)} page(s).")
    log_style.info(
        "%d spans in %d style groups over %d page(s).",
        sum(len(g) for g in style_groups.values()),
        len(style_groups),
        len(pages),
    )
    return style_groups
