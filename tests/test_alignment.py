from dataclasses import replace

from outliner_lib.alignment import find_aligned_groups
from outliner_lib.models import Column

COLUMNS = [Column(72, 300, 72, 50, 528, 750)]


def _ten_span_group(make_span):
    """7 spans flush with the column's left edge, 3 indented ones, all mids distinct."""
    left_aligned = [
        make_span(x=72, w=w, i_block=i) for i, w in enumerate([100, 150, 200, 250, 300, 350, 400])
    ]
    indented = [
        make_span(x=90, w=20, i_block=7),
        make_span(x=110, w=40, i_block=8),
        make_span(x=130, w=20, i_block=9),
    ]
    return left_aligned + indented


def test_alignment_ratio_passes_threshold(make_span, params):
    spans = _ten_span_group(make_span)
    groups, scores = find_aligned_groups({"A": spans}, COLUMNS, params)
    assert scores["A"] == 0.7
    assert groups["A"] == spans[:7]


def test_alignment_ratio_below_threshold(make_span, params):
    strict = replace(params, ALIGN_LEFT_RATIO=0.75)
    groups, scores = find_aligned_groups({"A": _ten_span_group(make_span)}, COLUMNS, strict)
    assert "A" not in groups
    assert scores["A"] == 0.7


def test_centered_spans_align_on_column_middle(make_span, params):
    spans = [make_span(x=300 - w / 2, w=w, i_block=i) for i, w in enumerate([80, 120, 200])]
    groups, scores = find_aligned_groups({"T": spans}, COLUMNS, params)
    assert groups["T"] == spans
    assert scores["T"] == 1
    assert all(span.i_col == 0 for span in spans)


def test_column_index_follows_nearest_anchor(make_span, params):
    columns = [Column(48, 168), Column(312, 432)]
    left = make_span(x=312, w=50)
    centered = make_span(x=100, w=136)
    find_aligned_groups({"A": [left], "B": [centered]}, columns, params)
    assert left.i_col == 1
    assert centered.i_col == 0


def test_empty_groups_are_dropped(params):
    groups, scores = find_aligned_groups({"A": []}, COLUMNS, params)
    assert groups == {} and scores == {}
