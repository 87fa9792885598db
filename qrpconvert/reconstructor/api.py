from __future__ import annotations

from typing import Iterable

from qrpconvert.emfparser.api import TextFragment
from .reconstructor import Grid, Reconstructor


def group_text_by_position(fragments: Iterable[TextFragment]) -> Grid:
    """Public API (Reconstructor)

    Contract:
    - Sort by y; fragments within 10 units of each other in y are ordered by x.
    - New row when y is more than 15 units from the current row's first fragment.
    - Each row ordered by x; coordinates dropped.
    - Empty input -> [].
    """
    return Reconstructor().group_text_by_position(fragments)
