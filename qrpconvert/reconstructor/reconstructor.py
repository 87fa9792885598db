from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, List

from qrpconvert.emfparser.api import TextFragment


# Empirical values, kept as-is: changing either regroups existing reports.
SORT_Y_TOLERANCE: int = 10
ROW_Y_TOLERANCE: int = 15

Row = List[str]
Grid = List[Row]


def _compare_fragments(a: TextFragment, b: TextFragment) -> int:
    y_diff = a.y - b.y
    if abs(y_diff) > SORT_Y_TOLERANCE:
        return y_diff
    return a.x - b.x


class Reconstructor:
    def group_text_by_position(self, fragments: Iterable[TextFragment]) -> Grid:
        # the tolerance comparator is not transitive; start from a total order
        canonical = sorted(fragments, key=lambda f: (f.y, f.x, f.text))
        frags_sorted = sorted(canonical, key=cmp_to_key(_compare_fragments))
        if not frags_sorted:
            return []

        rows: Grid = []
        current: List[TextFragment] = []
        anchor_y = frags_sorted[0].y
        for frag in frags_sorted:
            if abs(frag.y - anchor_y) > ROW_Y_TOLERANCE:
                if current:
                    rows.append(self._flatten(current))
                current = []
                anchor_y = frag.y
            current.append(frag)

        if current:
            rows.append(self._flatten(current))
        return rows

    def _flatten(self, row: List[TextFragment]) -> Row:
        return [f.text for f in sorted(row, key=lambda f: f.x)]
