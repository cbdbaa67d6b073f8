"""
outliner_lib/pdf_outline.py: Reads and writes the native PDF outline (bookmarks).

pdfminer is read-only, so PyMuPDF handles the bookmark tree. Destination
points use PyMuPDF page coordinates (top-left origin), matching the span model.
"""
import logging

import fitz

from .errors import OutlineFormatError
from .models import OutlineItem

log_io = logging.getLogger("outliner.io")

DEFAULT_FOLD_LEVEL = 2


def open_document(pdf_path):
    return fitz.open(pdf_path)


def get_outline(doc):
    """Flattens the document's existing bookmarks into OutlineItems."""
    outline = []
    for entry in doc.get_toc(simple=False):
        level, title, page = entry[0], entry[1], entry[2]
        dest = entry[3] if len(entry) > 3 else {}
        item = OutlineItem(level, title, page)
        point = dest.get("to") if dest.get("kind") == fitz.LINK_GOTO else None
        if point is not None:
            if point.x:
                item.x = point.x
            if point.y:
                item.y = point.y
        outline.append(item)
    log_io.debug("Existing outline has %d item(s)", len(outline))
    return outline


def validate_levels(outline):
    """Raises OutlineFormatError unless the levels describe a proper tree."""
    prev_level = 0
    for i, item in enumerate(outline, start=1):
        if item.level < 1 or item.level > prev_level + 1:
            raise OutlineFormatError(
                f"item {i} '{item.text}' jumps from level {prev_level} to {item.level}"
            )
        prev_level = item.level


def set_outline(doc, outline, fold_level=DEFAULT_FOLD_LEVEL):
    """Replaces the document's bookmarks with the given outline.

    Entries above fold_level start expanded; deeper ones start collapsed.
    """
    validate_levels(outline)
    toc = []
    for item in outline:
        dest = {
            "kind": fitz.LINK_GOTO,
            "page": item.page - 1,
            "to": fitz.Point(item.x or 0, item.y or 0),
        }
        toc.append([item.level, item.text, item.page, dest])
    doc.set_toc(toc, collapse=fold_level)
    log_io.info("Wrote %d bookmark(s), fold level %d", len(toc), fold_level)


def save_document(doc, out_path):
    doc.save(out_path, garbage=3, deflate=True)
    log_io.info("Saved to %s", out_path)
