from __future__ import annotations

from typing import List, Optional

from .emfparser import EmfParser
from .model import TextFragment


def find_emf_start(buf: bytes) -> Optional[int]:
    """Public API (EmfParser)

    Contract:
    - First " EMF" marker at i -> header start i - 40, clamped to 0.
    - None if the marker never occurs.
    """
    return EmfParser().find_emf_start(buf)


def find_next_emf(buf: bytes, start_offset: int) -> Optional[int]:
    """Next embedded EMF strictly after start_offset, else None."""
    return EmfParser().find_next_emf(buf, start_offset)


def parse_emf_records(buf: bytes) -> List[TextFragment]:
    """Public API (EmfParser)

    Contract:
    - Walk 8-byte-header records from the located EMF start.
    - Decode EMR_EXTTEXTOUTW / EMR_EXTTEXTOUTA (size > 76) into positioned fragments.
    - EMR_EOF continues into a later embedded EMF if one exists.
    - Truncated or corrupt record stream stops the walk without raising.
    - Empty list if no signature or no usable text; no deduplication.
    """
    return EmfParser().parse(buf)
