"""
outliner_lib/builder.py: Turns the surviving heading groups into an outline.
"""
import logging

from .models import OutlineItem

log_build = logging.getLogger("outliner.build")


def reading_order(style_groups):
    """Flattens the groups into (style, span) pairs sorted page, column, then top-down."""
    tagged = [(style, span) for style, spans in style_groups.items() for span in spans]
    return sorted(
        tagged,
        key=lambda item: (item[1].i_page, item[1].i_col or 0, item[1].y),
    )


def repair_levels(outline):
    """Clamps levels in place so that no item is more than one level below its predecessor."""
    prev_level = 0
    for item in outline:
        if item.level > prev_level + 1:
            item.level = prev_level + 1
        else:
            prev_level = item.level
    return outline


def structure_outline(style_groups, params):
    """[STAGE 8] Assigns a level to each style in order of first appearance."""
    levels, outline = {}, []
    for style, span in reading_order(style_groups):
        if style not in levels:
            levels[style] = len(levels) + 1
            log_build.debug("Level %d: %s", levels[style], style)
        span.style_str = style
        outline.append(OutlineItem(levels[style], span.text, span.i_page + 1, span.x, span.y))

    repair_levels(outline)
    result = [item for item in outline if item.level <= params.MAX_LEVELS]
    log_build.info(
        "Outline has %d item(s) (%d beyond level %d dropped)",
        len(result),
        len(outline) - len(result),
        params.MAX_LEVELS,
    )
    return result
