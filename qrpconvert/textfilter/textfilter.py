from __future__ import annotations

from typing import FrozenSet


IGNORED_TEXTS: FrozenSet[str] = frozenset(
    name.lower()
    for name in (
        "Arial", "Times New Roman", "Courier New", "Tahoma", "Verdana",
        "Angsana New", "AngsanaUPC", "CordiaUPC", "Cordia New", "Browallia New",
        "BrowalliaUPC", "EucrosiaUPC", "FreesiaUPC", "IrisUPC", "JasmineUPC",
        "KodchiangUPC", "LilyUPC",
        "Standard", "Text", "Page", "Title",
    )
)

MIN_TEXT_LENGTH: int = 2


class TextFilter:
    def is_ignored(self, text: str) -> bool:
        trimmed = text.strip()
        if trimmed.lower() in IGNORED_TEXTS:
            return True
        return len(trimmed) < MIN_TEXT_LENGTH
