import itertools

from qrpconvert.emfparser.api import TextFragment
from qrpconvert.reconstructor.api import group_text_by_position


def _f(text, x, y):
    return TextFragment(text=text, x=x, y=y)


def test_empty_input():
    assert group_text_by_position([]) == []


def test_single_fragment():
    assert group_text_by_position([_f("Only", 3, 4)]) == [["Only"]]


def test_row_boundary_threshold():
    assert group_text_by_position([_f("a", 0, 100), _f("b", 10, 114)]) == [["a", "b"]]
    assert group_text_by_position([_f("a", 0, 100), _f("b", 10, 116)]) == [["a"], ["b"]]


def test_rows_are_ordered_by_x():
    frags = [_f("#1023", 50, 5), _f("Invoice", 10, 5)]
    assert group_text_by_position(frags) == [["Invoice", "#1023"]]


def test_vertical_jitter_stays_in_one_line():
    frags = [_f("B", 50, 100), _f("A", 10, 108), _f("C", 90, 99)]
    assert group_text_by_position(frags) == [["A", "B", "C"]]


def test_row_anchor_is_first_fragment_of_row():
    # 130 is within 15 of 116 but not of the row anchor 100
    frags = [_f("a", 0, 100), _f("b", 0, 112), _f("c", 0, 130)]
    assert group_text_by_position(frags) == [["a", "b"], ["c"]]


def test_table_layout():
    frags = [
        _f("Qty", 200, 40), _f("Item", 20, 40),
        _f("3", 200, 62), _f("Widget", 20, 60),
        _f("12", 200, 81), _f("Bolt", 20, 80),
    ]
    assert group_text_by_position(frags) == [["Item", "Qty"], ["Widget", "3"], ["Bolt", "12"]]


def test_permutations_give_identical_grid():
    frags = [_f("Item", 20, 40), _f("Qty", 200, 40), _f("Widget", 20, 80), _f("3", 200, 81)]
    expected = group_text_by_position(frags)
    for perm in itertools.permutations(frags):
        assert group_text_by_position(list(perm)) == expected
    assert group_text_by_position(frags) == expected


def test_synthetic_fallback_positions_keep_order():
    frags = [_f("first", 0, 0), _f("second", 0, 20), _f("third", 0, 40)]
    assert group_text_by_position(frags) == [["first"], ["second"], ["third"]]


def test_jitter_chain_is_order_independent():
    # A-B and B-C are within the sort tolerance, A-C is not
    frags = [_f("A", 0, 30), _f("B", 5, 21), _f("C", 10, 12)]
    grids = {
        tuple(tuple(row) for row in group_text_by_position(list(perm)))
        for perm in itertools.permutations(frags)
    }
    assert len(grids) == 1
    (grid,) = grids
    assert sorted(text for row in grid for text in row) == ["A", "B", "C"]
