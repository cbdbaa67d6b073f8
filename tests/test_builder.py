from dataclasses import replace

from outliner_lib.builder import repair_levels, structure_outline
from outliner_lib.models import OutlineItem


def test_levels_follow_first_appearance_and_reading_order(make_span, params):
    groups = {
        "sub": [
            make_span(text="1.1 Scope", y=300, i_page=0, i_col=0),
            make_span(text="2.1 Data", y=150, i_page=1, i_col=1),
        ],
        "chapter": [
            make_span(text="1 Introduction", y=100, i_page=0, i_col=0),
            make_span(text="2 Methods", y=500, i_page=1, i_col=0),
        ],
    }
    outline = structure_outline(groups, params)
    assert [(i.level, i.text, i.page) for i in outline] == [
        (1, "1 Introduction", 1),
        (2, "1.1 Scope", 1),
        (1, "2 Methods", 2),
        (2, "2.1 Data", 2),
    ]
    assert (outline[0].x, outline[0].y) == (72, 100)


def test_repair_levels_clamps_jumps():
    outline = [OutlineItem(level, f"item {i}", 1) for i, level in enumerate([2, 3, 1, 3, 3, 2])]
    repair_levels(outline)
    # a clamped item does not raise the reference level for the next one
    assert [item.level for item in outline] == [1, 1, 1, 2, 2, 2]


def test_tree_depth_and_max_levels(make_span, params):
    styles = [f"style{i}" for i in range(5)]
    groups = {
        style: [make_span(text=f"{style} heading", y=100 + 40 * i, i_col=0)]
        for i, style in enumerate(styles)
    }
    # a deeper style reappearing after a shallow one
    groups["style0"].append(make_span(text="again", y=400, i_col=0))
    groups["style4"].append(make_span(text="deep", y=440, i_col=0))

    outline = structure_outline(groups, replace(params, MAX_LEVELS=3))
    levels = [item.level for item in outline]
    assert all(b <= a + 1 for a, b in zip([0] + levels, levels))
    assert max(levels) <= 3
    assert [item.text for item in outline] == [
        "style0 heading",
        "style1 heading",
        "style2 heading",
        "again",
        "deep",
    ]


def test_empty_groups_give_empty_outline(params):
    assert structure_outline({}, params) == []
