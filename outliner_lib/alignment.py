"""
outliner_lib/alignment.py: Keeps style groups that line up with a text column.

Headings of one level sit at a consistent offset from a column, either from
its left edge or from its middle (centered titles). A group whose distances
agree often enough is considered aligned.
"""
import logging

from .util import find_abs_min_dist, find_mode, round_to_bin

log_align = logging.getLogger("outliner.align")


def _column_distances(span, left_bins, mid_bins, bin_size):
    d_left, i_left = find_abs_min_dist(round_to_bin(span.x, bin_size), left_bins)
    d_mid, i_mid = find_abs_min_dist(round_to_bin(span.x + span.w / 2, bin_size), mid_bins)
    span.i_col = i_left if d_left < d_mid else i_mid
    return d_left, d_mid


def find_aligned_groups(style_groups, columns, params):
    """[STAGE 4] Filters style groups by column alignment.

    Returns:
        tuple: (aligned groups holding only their aligned spans,
                {style: max(left ratio, mid ratio)} for every non-empty group)
    """
    left_bins = [col.x_left_bin for col in columns]
    mid_bins = [col.x_mid_bin for col in columns]

    aligned_groups, alignment_scores = {}, {}
    for style, spans in style_groups.items():
        if not spans:
            continue
        left_dists, mid_dists = [], []
        for span in spans:
            d_left, d_mid = _column_distances(span, left_bins, mid_bins, params.TOL_BIN_SIZE)
            left_dists.append(d_left)
            mid_dists.append(d_mid)

        # aligned spans keep a consistent distance to the column reference
        left_mode, mid_mode = find_mode(left_dists), find_mode(mid_dists)
        left_ratio = left_dists.count(left_mode) / len(spans)
        mid_ratio = mid_dists.count(mid_mode) / len(spans)
        alignment_scores[style] = max(left_ratio, mid_ratio)

        if left_ratio > params.ALIGN_LEFT_RATIO or mid_ratio > params.ALIGN_MID_RATIO:
            aligned_groups[style] = [
                span
                for span, d_left, d_mid in zip(spans, left_dists, mid_dists)
                if d_left == left_mode or d_mid == mid_mode
            ]
            log_align.debug(
                "Style %s: %d spans, align l=%.2f m=%.2f",
                style,
                len(aligned_groups[style]),
                left_ratio,
                mid_ratio,
            )
        else:
            log_align.debug(
                "Style %s not aligned (l=%.2f m=%.2f)", style, left_ratio, mid_ratio
            )

    log_align.info("%d of %d style groups aligned", len(aligned_groups), len(style_groups))
    return aligned_groups, alignment_scores
