"""
outliner_lib/util.py: Small numeric helpers shared by the pipeline stages.
"""
import math


def round_half_up(x):
    """Rounds to the nearest integer, with .5 always rounding up."""
    return math.floor(x + 0.5)


def round_to_bin(x, bin_size):
    """Snaps a coordinate to the nearest multiple of bin_size."""
    return round_half_up(x / bin_size) * bin_size


def find_abs_min_dist(x, refs):
    """Returns (distance, index) of the reference closest to x.

    The first reference wins when several are equally close.
    """
    best_d, best_i = abs(x - refs[0]), 0
    for i, ref in enumerate(refs):
        d = abs(x - ref)
        if d < best_d:
            best_d, best_i = d, i
    return best_d, best_i


def find_max_kv(mapping):
    """Returns the (key, value) pair with the largest value, first one on ties."""
    items = iter(mapping.items())
    max_k, max_v = next(items)
    for k, v in items:
        if v > max_v:
            max_k, max_v = k, v
    return max_k, max_v


def find_mode(values):
    """Returns the most frequent value.

    Ties go to the value that first reached the top count while scanning,
    which keeps results reproducible for a given input order.
    """
    if not values:
        return None
    counts = {}
    mode = values[0]
    for v in values:
        counts[v] = counts.get(v, 0) + 1
        if counts[v] > counts[mode]:
            mode = v
    return mode
