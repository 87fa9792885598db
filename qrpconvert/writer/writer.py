from __future__ import annotations

import io
import os
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from urllib.parse import quote

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .model import WriteResult


DEFAULT_TITLE: str = "ข้อมูลที่ดึงได้จากไฟล์ QRP"
SHEET_NAME: str = "Sheet1"
MIN_COLUMN_WIDTH: int = 10
MAX_COLUMN_WIDTH: int = 50
COLUMN_PADDING: int = 2
DOWNLOAD_FALLBACK_NAME: str = "converted.xlsx"

_QRP_SUFFIX_RE = re.compile(r"\.qrp$", re.IGNORECASE)


class WriterError(RuntimeError):
    pass


class Writer:
    def build_workbook(self, rows: Sequence[Sequence[str]], title: Optional[str] = DEFAULT_TITLE) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_NAME

        sheet_rows: List[List[str]] = []
        if title:
            sheet_rows.append([self._clean(title)])
            sheet_rows.append([])
        sheet_rows.extend([self._clean(cell) for cell in row] for row in rows)

        for row_idx, row in enumerate(sheet_rows, start=1):
            for col_idx, value in enumerate(row, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                # text only, never a formula
                if isinstance(value, str) and value.startswith("="):
                    cell.data_type = "s"

        self._autosize_columns(ws, sheet_rows)
        return wb

    def build_workbook_bytes(self, rows: Sequence[Sequence[str]], title: Optional[str] = DEFAULT_TITLE) -> bytes:
        wb = self.build_workbook(rows, title)
        out = io.BytesIO()
        wb.save(out)
        return out.getvalue()

    def write_grid(
        self,
        rows: Sequence[Sequence[str]],
        source_name: str,
        output_dir: str,
        title: Optional[str] = DEFAULT_TITLE,
    ) -> WriteResult:
        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        excel_path = out_dir / self.output_filename(source_name)

        lock_path = out_dir / ".excel_writer.lock"
        self._acquire_lock(lock_path)
        try:
            status = "replaced" if excel_path.exists() else "created"
            self.build_workbook(rows, title).save(excel_path)
        finally:
            self._release_lock(lock_path)

        return WriteResult(excel_path=str(excel_path), sheet_name=SHEET_NAME, row_count=len(rows), status=status)

    def output_filename(self, source_name: str) -> str:
        stem = _QRP_SUFFIX_RE.sub("", Path(source_name).name)
        return f"{stem}.xlsx"

    def content_disposition(self, source_name: str) -> str:
        encoded = quote(self.output_filename(source_name), safe="!~*'()")
        return f"attachment; filename=\"{DOWNLOAD_FALLBACK_NAME}\"; filename*=UTF-8''{encoded}"

    def _clean(self, value: str) -> str:
        return ILLEGAL_CHARACTERS_RE.sub("", str(value)) if value is not None else ""

    def _autosize_columns(self, ws: Worksheet, rows: Sequence[Sequence[str]]) -> None:
        widths: Dict[int, int] = {}
        for row in rows:
            for idx, cell in enumerate(row):
                length = len(str(cell)) if cell else 0
                widths[idx] = max(widths.get(idx, MIN_COLUMN_WIDTH), length + COLUMN_PADDING)
        for idx, width in widths.items():
            ws.column_dimensions[get_column_letter(idx + 1)].width = min(width, MAX_COLUMN_WIDTH)

    def _acquire_lock(self, lock_path: Path) -> None:
        try:
            fd = os.open(str(lock_path), os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            os.close(fd)
        except FileExistsError:
            raise WriterError("excel_writer_lock_exists")

    def _release_lock(self, lock_path: Path) -> None:
        try:
            lock_path.unlink(missing_ok=True)
        except OSError:
            pass
