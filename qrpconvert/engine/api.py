from __future__ import annotations

from typing import List

from qrpconvert.emfparser.api import TextFragment
from qrpconvert.reconstructor.api import Grid
from .engine import Engine


def extract(data: bytes) -> Grid:
    """Public API (Engine)

    Contract:
    - raw QRP bytes -> rows of cell strings, top-to-bottom, left-to-right.
    - Structured EMF parse first; heuristic UTF-16 scan if there is no EMF or it yields nothing.
    - Never raises on malformed or empty input; returns [] when nothing is found.
    """
    return Engine().extract(data)


def extract_fragments(data: bytes) -> List[TextFragment]:
    """Positioned fragments before row reconstruction."""
    return Engine().extract_fragments(data)
