from __future__ import annotations

from typing import List

from qrpconvert.emfparser.api import TextFragment
from .fallbackscanner import FallbackScanner


def scan_utf16_strings(buf: bytes) -> List[TextFragment]:
    """Public API (FallbackScanner)

    Contract:
    - Trigger on a raw UTF-16LE Thai code unit, walk back to the run start, read forward
      until NUL or an invalid code unit.
    - Synthetic positions: x = 0, y = 20 * (strings accepted so far).
    - Deduplicated by text, first occurrence wins.
    """
    return FallbackScanner().scan(buf)
