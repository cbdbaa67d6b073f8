#!/usr/bin/env python3
"""
outliner_lib/extractor.py: Builds the span-level page models from a PDF.

This module contains the SpanExtractor class, which walks the pdfminer layout
tree of every page and turns each text box into a Block of RawSpans. A span
is a run of characters of one line that share font, size and color. The
font descriptor (family, weight, style) is inferred from the PostScript font
name, since that is all the PDF exposes reliably.
"""
import logging
import os
import re

from pdfminer.high_level import extract_pages
from pdfminer.layout import LAParams, LTAnno, LTChar, LTTextBox, LTTextLine

from .models import Block, FontStyle, PageModel, RawSpan

# --- LOGGING SETUP ---
log_extract = logging.getLogger("outliner.extract")

SUBSET_PREFIX_RE = re.compile(r"^[A-Z]{6}\+")
MONOSPACE_HINTS = ("mono", "courier", "consol", "typewriter")
SANS_HINTS = ("sans", "arial", "helvetica", "verdana", "calibri", "gothic", "tahoma")
BOLD_HINTS = ("bold", "black", "heavy", "semibold", "demi")
ITALIC_HINTS = ("italic", "oblique")


def parse_font(fontname, size, color=0):
    """Derives a FontStyle from a PostScript font name like 'ABCDEF+Arial-BoldMT'."""
    name = SUBSET_PREFIX_RE.sub("", fontname or "")
    lower = name.lower()
    if any(h in lower for h in MONOSPACE_HINTS):
        family = "monospace"
    elif any(h in lower for h in SANS_HINTS):
        family = "sans-serif"
    else:
        family = "serif"
    weight = "bold" if any(h in lower for h in BOLD_HINTS) else "normal"
    style = "italic" if any(h in lower for h in ITALIC_HINTS) else "normal"
    return FontStyle(name, family, weight, style, round(size, 2), color)


def color_to_int(ncolor):
    """Packs a pdfminer non-stroking color (gray, RGB or CMYK) into 0xRRGGBB."""
    if ncolor is None:
        return 0
    if isinstance(ncolor, (int, float)):
        ncolor = (ncolor,)
    try:
        comps = [float(c) for c in ncolor]
    except (TypeError, ValueError):
        # pattern colors and other non-numeric color spaces
        return 0
    if len(comps) == 1:
        r = g = b = comps[0]
    elif len(comps) == 3:
        r, g, b = comps
    elif len(comps) == 4:
        c, m, y, k = comps
        r, g, b = (1 - c) * (1 - k), (1 - m) * (1 - k), (1 - y) * (1 - k)
    else:
        return 0
    r, g, b = (max(0, min(255, round(v * 255))) for v in (r, g, b))
    return (r << 16) | (g << 8) | b


class SpanExtractor:
    """
    Extracts the per-page block and span model from a PDF file.
    Args:
        pdf_path (str): The file path to the PDF.
        laparams (LAParams): Optional pdfminer layout parameters.
    """

    def __init__(self, pdf_path, laparams=None):
        self.pdf_path = pdf_path
        self.laparams = laparams or LAParams()
        if not os.path.exists(self.pdf_path):
            raise FileNotFoundError(f"PDF file not found: {self.pdf_path}")

    def load_page_models(self):
        """Returns one PageModel per page, in document order."""
        page_models = []
        for page_layout in extract_pages(self.pdf_path, laparams=self.laparams):
            page_models.append(self.build_page_model(page_layout))
        log_extract.info("Extracted %d page(s) from %s", len(page_models), self.pdf_path)
        return page_models

    def build_page_model(self, layout):
        """Converts a pdfminer LTPage into a PageModel."""
        page = PageModel(layout.width, layout.height)
        for box in self._find_elements_by_type(layout, LTTextBox):
            raw_spans = [
                span
                for line in box
                if isinstance(line, LTTextLine)
                for span in self._line_to_spans(line, layout.height)
            ]
            if not raw_spans:
                continue
            y_top = layout.height - box.y1
            page.blocks.append(
                Block(box.x0, y_top, box.x1 - box.x0, box.y1 - box.y0, raw_spans)
            )
        log_extract.debug("Page %s: %d text block(s)", layout.pageid, len(page.blocks))
        return page

    def _line_to_spans(self, line, page_height):
        """Cuts a text line into runs of characters with the same font."""
        spans, run, run_key, text = [], [], None, ""
        for obj in line:
            if isinstance(obj, LTChar):
                key = (obj.fontname, obj.size, self._get_char_color(obj))
                if run and key != run_key:
                    spans.append(self._make_span(run, run_key, text, page_height))
                    run, text = [], ""
                run.append(obj)
                run_key = key
                text += obj.get_text()
            elif isinstance(obj, LTAnno) and run:
                text += obj.get_text()
        if run:
            spans.append(self._make_span(run, run_key, text, page_height))
        return [span for span in spans if span is not None]

    def _make_span(self, chars, key, text, page_height):
        text = re.sub(r"\s+", " ", text).strip()
        if not text:
            return None
        fontname, size, color = key
        x0, x1 = min(c.x0 for c in chars), max(c.x1 for c in chars)
        y0, y1 = min(c.y0 for c in chars), max(c.y1 for c in chars)
        font = parse_font(fontname, size, color)
        return RawSpan(x0, page_height - y1, x1 - x0, y1 - y0, text, font)

    def _get_char_color(self, char):
        color = getattr(char, "non_stroking_color", None)
        if color is None:
            graphicstate = getattr(char, "graphicstate", None)
            color = getattr(graphicstate, "ncolor", None)
        return color_to_int(color)

    def _find_elements_by_type(self, obj, t):
        """Recursively finds all layout elements of a specific type."""
        e = []
        if isinstance(obj, t):
            e.append(obj)
            return e
        if hasattr(obj, "_objs"):
            for child in obj:
                e.extend(self._find_elements_by_type(child, t))
        return e


def load_page_models(pdf_path):
    """Convenience wrapper around SpanExtractor.load_page_models."""
    return SpanExtractor(pdf_path).load_page_models()
