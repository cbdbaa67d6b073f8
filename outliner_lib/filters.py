"""
outliner_lib/filters.py: Span and group filters applied around alignment.

- filter_spans_pre: drops spans outside the main text area (margins).
- filter_groups: drops whole style groups that are unlikely to be headings.
- filter_spans_post: drops false positives after restructuring.
"""
import logging
from collections import Counter

from .styles import style_font_size
from .util import find_max_kv

log_filter = logging.getLogger("outliner.filter")

# A block with more lines than this is body text in its main style
MAX_HEADING_BLOCK_LINES = 3


def _passes(span, span_filters):
    return not any(f(span) for f in span_filters.values())


def _is_perfectly_aligned(style, group, alignment_scores):
    return len(group) > 1 and alignment_scores.get(style) == 1


def filter_spans_pre(style_groups, columns, params):
    """[STAGE 3] Removes running headers, footers and marginal notes in place.

    Groups emptied here are kept; later stages drop them uniformly.
    """
    x_left = min(col.x0 for col in columns)
    x_right = max(col.x1 for col in columns)
    y_top = min(col.y0 for col in columns)
    y_bottom = max(col.y1 for col in columns)
    tol = params.TOL_BIN_SIZE
    log_filter.info(
        "Main box x=[%.1f,%.1f] y=[%.1f,%.1f]", x_left, x_right, y_top, y_bottom
    )

    span_filters = {
        "span_in_margin": lambda s: (
            s.x < x_left - tol
            or s.x + s.w > x_right + tol
            or s.y < y_top - tol
            or s.y + s.h > y_bottom + tol
        ),
    }
    for style, spans in style_groups.items():
        kept = [s for s in spans if _passes(s, span_filters)]
        if len(kept) < len(spans):
            log_filter.debug("Pre-filtered %s from %d to %d", style, len(spans), len(kept))
            style_groups[style] = kept


def filter_groups(style_groups, alignment_scores, params):
    """[STAGE 5] Drops groups that are unlikely to be headings, in place.

    Returns:
        dict: {style: name of the first filter that rejected it}
    """
    if not style_groups:
        return {}
    main_style, _ = find_max_kv({k: len(v) for k, v in style_groups.items()})
    main_font_size = style_font_size(main_style)
    log_filter.debug("Body style %s, font size %g", main_style, main_font_size)

    def too_few_spans(style, group):
        if _is_perfectly_aligned(style, group, alignment_scores):
            return False
        return len(group) < params.FILTER_MIN_SPANS_PER_GROUP

    def too_many_per_page(style, group):
        counts = Counter(span.i_page for span in group)
        return any(n > params.FILTER_MAX_SPANS_PER_PAGE for n in counts.values())

    def text_too_small(style, group):
        return style_font_size(style) < main_font_size - params.FILTER_FONTSIZE_SMALLER

    def text_too_short(style, group):
        # e.g. figure labels
        avg_len = sum(len(span.text) for span in group) / len(group)
        return avg_len < params.FILTER_TEXT_AVG_LEN

    group_filters = {
        "too_few_spans": too_few_spans,
        "too_many_per_page": too_many_per_page,
        "text_too_small": text_too_small,
        "text_too_short": text_too_short,
    }

    n_pre, dropped = len(style_groups), {}
    for style, group in list(style_groups.items()):
        for name, group_filter in group_filters.items():
            if group_filter(style, group):
                del style_groups[style]
                dropped[style] = name
                log_filter.debug("Style: %s, Spans: %d, Filter: %s", style, len(group), name)
                break

    log_filter.info("%d of %d style groups after group filter", len(style_groups), n_pre)
    for style, group in style_groups.items():
        log_filter.debug("Style: %s, Spans: %d", style, len(group))
    return dropped


def filter_spans_post(style_groups, pages, alignment_scores, params):
    """[STAGE 7] Drops misplaced heading-styled spans and undersized groups."""

    def block_of(span):
        return pages[span.i_page].blocks[span.i_block]

    span_filters = {
        # heading-styled fragment in the middle of a paragraph
        "span_not_at_beginning": lambda s: s.i_span > 0,
        "main_span_in_large_block": lambda s: (
            s.style_str == block_of(s).main_style_str
            and block_of(s).n_lines > MAX_HEADING_BLOCK_LINES
        ),
    }

    n_pre = len(style_groups)
    for style, spans in list(style_groups.items()):
        kept = [s for s in spans if _passes(s, span_filters)]
        if len(kept) < params.FILTER_MIN_SPANS_PER_GROUP and not _is_perfectly_aligned(
            style, kept, alignment_scores
        ):
            log_filter.debug("Style %s dropped with %d spans left", style, len(kept))
            del style_groups[style]
        else:
            style_groups[style] = kept
    log_filter.info("%d of %d style groups after span filter", len(style_groups), n_pre)
