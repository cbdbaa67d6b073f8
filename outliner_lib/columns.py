"""
outliner_lib/columns.py: Detects the dominant text columns of a document.
"""
import logging

from .errors import NoColumnsError
from .models import Column
from .util import round_half_up, round_to_bin

log_columns = logging.getLogger("outliner.columns")

# Only body-like blocks vote on the column layout
MIN_BLOCK_LINES = 5


def collect_column_candidates(pages, params):
    """Aggregates multi-line blocks by their (left, middle) alignment bins."""
    candidates = {}
    for page in pages:
        for block in page.blocks:
            if block.n_lines < MIN_BLOCK_LINES:
                continue
            x_left_bin = round_to_bin(block.x, params.TOL_BIN_SIZE)
            x_mid_bin = round_to_bin(round_half_up(block.x + block.w / 2), params.TOL_BIN_SIZE)
            x1, y1 = block.x + block.w, block.y + block.h
            col = candidates.get((x_left_bin, x_mid_bin))
            if col is None:
                candidates[(x_left_bin, x_mid_bin)] = Column(
                    x_left_bin, x_mid_bin, block.x, block.y, x1, y1, block.w * block.h
                )
            else:
                col.x0, col.y0 = min(col.x0, block.x), min(col.y0, block.y)
                col.x1, col.y1 = max(col.x1, x1), max(col.y1, y1)
                col.area += block.w * block.h
    return list(candidates.values())


def select_columns(candidates, decay_rate):
    """Keeps the largest candidates while their area decays slowly enough.

    The largest is always kept; each next one must cover more than
    decay_rate times the area of the one before it.
    """
    ranked = sorted(candidates, key=lambda c: c.area, reverse=True)
    if not ranked:
        return []
    columns = [ranked[0]]
    for prev, col in zip(ranked, ranked[1:]):
        if col.area <= decay_rate * prev.area:
            break
        columns.append(col)
    return sorted(columns, key=lambda c: c.x_left_bin)


def find_columns(pages, params):
    """[STAGE 2] Returns the aligned text columns, sorted left to right."""
    candidates = collect_column_candidates(pages, params)
    if not candidates:
        raise NoColumnsError(
            f"No block with at least {MIN_BLOCK_LINES} lines; cannot determine the "
            "column layout."
        )
    log_columns.debug(
        "Column candidates: %s",
        ", ".join(f"{c} area={c.area:.0f}" for c in candidates),
    )
    columns = select_columns(candidates, params.ALIGN_DECAY_RATE)
    log_columns.info(
        "%d aligned column(s): %s", len(columns), " ".join(str(c) for c in columns)
    )
    return columns
