from __future__ import annotations

from .decoder import Decoder


def decode_utf16le(data: bytes) -> str:
    """Public API (Decoder)

    Contract:
    - Little-endian UTF-16, no BOM handling.
    - A dangling odd byte is ignored.
    """
    return Decoder().decode_utf16le(data)


def decode_legacy_thai(data: bytes) -> str:
    """Public API (Decoder)

    Contract:
    - 0xA1..0xFB -> U+0E00 + (b - 0xA0).
    - 0x20..0x7E pass through as ASCII.
    - All other bytes are dropped.
    """
    return Decoder().decode_legacy_thai(data)
