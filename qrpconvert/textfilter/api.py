from __future__ import annotations

from .textfilter import TextFilter


def is_ignored_text(text: str) -> bool:
    """Public API (TextFilter)

    Contract:
    - True for font names / template labels (case-insensitive, exact match after trim).
    - True for anything with one character or less after trim.
    - Shared by the structured parser and the fallback scanner.
    """
    return TextFilter().is_ignored(text)
