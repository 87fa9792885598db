from __future__ import annotations


# Windows-874 / TIS-620: 0xA1..0xFB map onto the Thai block starting at U+0E01.
THAI_BYTE_MIN: int = 0xA1
THAI_BYTE_MAX: int = 0xFB
THAI_BYTE_BASE: int = 0xA0
THAI_CODEPOINT_BASE: int = 0x0E00

ASCII_PRINTABLE_MIN: int = 0x20
ASCII_PRINTABLE_MAX: int = 0x7E


class Decoder:
    def decode_utf16le(self, data: bytes) -> str:
        if len(data) % 2:
            data = data[:-1]
        return data.decode("utf-16-le", errors="replace")

    def decode_legacy_thai(self, data: bytes) -> str:
        chars = []
        for b in data:
            if THAI_BYTE_MIN <= b <= THAI_BYTE_MAX:
                chars.append(chr(THAI_CODEPOINT_BASE + (b - THAI_BYTE_BASE)))
            elif ASCII_PRINTABLE_MIN <= b <= ASCII_PRINTABLE_MAX:
                chars.append(chr(b))
            # anything else is dropped
        return "".join(chars)
