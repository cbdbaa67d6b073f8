# --- outliner_lib/api.py ---
"""
outliner_lib/api.py: Entry points that run the full outline pipeline.
"""
import logging
import os

from .alignment import find_aligned_groups
from .builder import structure_outline
from .columns import find_columns
from .extractor import SpanExtractor
from .filters import filter_groups, filter_spans_post, filter_spans_pre
from .params import Params
from .restructure import process_style_groups
from .styles import group_text_by_style

log = logging.getLogger("outliner.api")


def find_outline(pages, params: Params = None):
    """
    Reconstructs the outline of a document from its span-level page models.

    The page models are normalized in place (merged spans, block main styles).
    Raises EmptyDocumentError or NoColumnsError when the document gives the
    heuristics nothing to anchor on; an empty list is a valid result.
    """
    params = params or Params()
    style_groups = group_text_by_style(pages, params)
    columns = find_columns(pages, params)
    filter_spans_pre(style_groups, columns, params)
    outline_groups, alignment_scores = find_aligned_groups(style_groups, columns, params)
    filter_groups(outline_groups, alignment_scores, params)
    process_style_groups(outline_groups, pages, params)
    filter_spans_post(outline_groups, pages, alignment_scores, params)
    outline = structure_outline(outline_groups, params)
    if not outline:
        log.warning("No heading styles survived filtering; the outline is empty.")
    return outline


def extract_outline(pdf_path: str, params: Params = None):
    """Extracts the span model of a PDF file and reconstructs its outline."""
    if not os.path.exists(pdf_path):
        raise FileNotFoundError(f"PDF file not found: {pdf_path}")
    pages = SpanExtractor(pdf_path).load_page_models()
    log.info("Finding outline for %s", pdf_path)
    return find_outline(pages, params)
