from __future__ import annotations

from typing import Optional, Sequence

from .model import WriteResult
from .writer import DEFAULT_TITLE, Writer, WriterError


def build_workbook_bytes(rows: Sequence[Sequence[str]], title: Optional[str] = DEFAULT_TITLE) -> bytes:
    """Public API (Writer)

    Contract:
    - One sheet ("Sheet1"), rows placed verbatim.
    - If title is set: title row + one blank row before the data.
    - Column width = widest cell + 2, at least 10, at most 50.
    """
    return Writer().build_workbook_bytes(rows, title)


def write_grid(
    rows: Sequence[Sequence[str]],
    source_name: str,
    output_dir: str,
    title: Optional[str] = DEFAULT_TITLE,
) -> WriteResult:
    """Public API (Writer)

    Contract:
    - <output_dir>/<source stem>.xlsx, overwritten if present.
    - Global excel writer lock file in output dir.
    """
    return Writer().write_grid(rows, source_name, output_dir, title)


def output_filename(source_name: str) -> str:
    """report.QRP -> report.xlsx"""
    return Writer().output_filename(source_name)


def content_disposition(source_name: str) -> str:
    return Writer().content_disposition(source_name)
