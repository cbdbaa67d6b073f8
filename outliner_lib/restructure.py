"""
outliner_lib/restructure.py: Joins and splits heading candidates.

Runs after the group filter: multi-line headings are joined into one span,
then headings embedded in body lines and all-caps headings are split into
their own style groups, since they usually denote a different level.
"""
import logging

from .styles import SUFFIX_ALL_CAP, SUFFIX_INLINE

log_restructure = logging.getLogger("outliner.restructure")

# Shorter all-caps strings are usually abbreviations
MIN_ALL_CAP_LEN = 5


def join_span_lines(style, spans, pages):
    """Absorbs the following same-style spans of each block into one heading."""
    joined, seen = [], set()
    for span in spans:
        if span.key in seen:
            continue
        block = pages[span.i_page].blocks[span.i_block]
        for next_span in block.spans[span.i_span + 1 :]:
            if next_span.style_str != style:
                break
            span.text = f"{span.text} {next_span.text}"
            span.w = max(span.w, next_span.w)
            span.h = next_span.y - span.y + next_span.h
            seen.add(next_span.key)
        joined.append(span)
        seen.add(span.key)
    return joined


def _is_inline(span, block, tol):
    return any(
        other.i_span != span.i_span
        and other.style_str != span.style_str
        and abs(other.y - span.y) < tol
        for other in block.spans
    )


def split_inline_groups(style_groups, pages, params):
    """Moves headings that share a line with body text into '<style>_inline'."""
    new_groups = {}
    for style, spans in list(style_groups.items()):
        block_spans = []  # the block is mainly in this style
        sep_line_spans = []  # other styles in the block, but on other lines
        inline_spans = []
        for span in spans:
            block = pages[span.i_page].blocks[span.i_block]
            if block.main_style_str == style:
                block_spans.append(span)
            elif _is_inline(span, block, params.TOL_BIN_SIZE):
                inline_spans.append(span)
            else:
                sep_line_spans.append(span)

        if inline_spans and len(inline_spans) < len(spans):
            new_style = style + SUFFIX_INLINE
            log_restructure.info(
                "add group %s, %d spans out of %d", new_style, len(inline_spans), len(spans)
            )
            new_groups[new_style] = inline_spans
            style_groups[style] = block_spans + sep_line_spans
    style_groups.update(new_groups)


def _is_all_caps(text):
    return len(text) > MIN_ALL_CAP_LEN and text == text.upper()


def split_all_cap_groups(style_groups, params):
    """Moves all-caps headings into '<style>_allCap' when they are a large minority."""
    new_groups = {}
    for style, spans in list(style_groups.items()):
        if not spans:
            continue
        all_cap_spans = [s for s in spans if _is_all_caps(s.text)]
        ratio = len(all_cap_spans) / len(spans)
        if ratio == 1 or ratio <= params.SPLIT_GROUP_RATIO:
            continue
        new_style = style + SUFFIX_ALL_CAP
        log_restructure.info(
            "add group %s, %d spans out of %d", new_style, len(all_cap_spans), len(spans)
        )
        style_groups[style] = [s for s in spans if not _is_all_caps(s.text)]
        new_groups[new_style] = all_cap_spans
    style_groups.update(new_groups)


def process_style_groups(style_groups, pages, params):
    """[STAGE 6] Joins multi-line headings, then splits inline and all-caps groups."""
    for style, spans in list(style_groups.items()):
        style_groups[style] = join_span_lines(style, spans, pages)
    split_inline_groups(style_groups, pages, params)
    split_all_cap_groups(style_groups, params)
