from __future__ import annotations

import struct
from typing import List, Set

from qrpconvert.emfparser.api import TextFragment
from qrpconvert.textfilter.api import is_ignored_text


# Raw UTF-16LE Thai code unit: low byte 0x01..0x7F, high byte 0x0E.
THAI_HIGH_BYTE: int = 0x0E
LEAD_LOW_BYTE_MIN: int = 0x01
LEAD_LOW_BYTE_MAX: int = 0x7F

THAI_CODE_MIN: int = 0x0E01
THAI_CODE_MAX: int = 0x0E5B
ASCII_PRINTABLE_MIN: int = 0x20
ASCII_PRINTABLE_MAX: int = 0x7E
CONTROL_CODES = frozenset((0x09, 0x0A, 0x0D))

SYNTHETIC_Y_STEP: int = 20

_U16 = struct.Struct("<H")


def is_valid_char(code: int) -> bool:
    if ASCII_PRINTABLE_MIN <= code <= ASCII_PRINTABLE_MAX:
        return True
    if THAI_CODE_MIN <= code <= THAI_CODE_MAX:
        return True
    return code in CONTROL_CODES


class FallbackScanner:
    """Pulls UTF-16LE Thai/ASCII runs out of a buffer with no usable EMF records."""

    def scan(self, buf: bytes) -> List[TextFragment]:
        found: List[TextFragment] = []
        n = len(buf)
        i = 0
        while i < n - 4:
            if buf[i + 1] == THAI_HIGH_BYTE and LEAD_LOW_BYTE_MIN <= buf[i] <= LEAD_LOW_BYTE_MAX:
                start = self._walk_back(buf, i)
                text, end = self._read_string(buf, start)
                trimmed = text.strip()
                if trimmed and not is_ignored_text(text):
                    found.append(TextFragment(text=trimmed, x=0, y=len(found) * SYNTHETIC_Y_STEP))
                i = end + 2
                continue
            i += 1
        return self._dedupe(found)

    def _walk_back(self, buf: bytes, start: int) -> int:
        while start > 0 and self._is_valid_unit(buf, start - 2):
            start -= 2
        return start

    def _read_string(self, buf: bytes, start: int):
        chars: List[str] = []
        pos = start
        while pos < len(buf) - 1:
            code = _U16.unpack_from(buf, pos)[0]
            if code == 0 or not is_valid_char(code):
                break
            chars.append(chr(code))
            pos += 2
        return "".join(chars), pos

    def _is_valid_unit(self, buf: bytes, offset: int) -> bool:
        if offset < 0 or offset + 1 >= len(buf):
            return False
        return is_valid_char(_U16.unpack_from(buf, offset)[0])

    def _dedupe(self, fragments: List[TextFragment]) -> List[TextFragment]:
        seen: Set[str] = set()
        out: List[TextFragment] = []
        for f in fragments:
            if f.text in seen:
                continue
            seen.add(f.text)
            out.append(f)
        return out
