from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Optional

from qrpconvert.engine.api import extract
from qrpconvert.writer.api import DEFAULT_TITLE, build_workbook_bytes, write_grid
from .model import JobResult, PreviewResult

log = logging.getLogger(__name__)


PREVIEW_ROW_LIMIT: int = 100


class JobControllerError(RuntimeError):
    pass


class JobController:
    def preview(self, source_path: str, limit: int = PREVIEW_ROW_LIMIT) -> PreviewResult:
        return self.preview_bytes(self._read_source(Path(source_path)), limit)

    def preview_bytes(self, data: bytes, limit: int = PREVIEW_ROW_LIMIT) -> PreviewResult:
        if limit < 0:
            raise JobControllerError(f"invalid preview limit: {limit}")
        rows = extract(data)
        return PreviewResult(rows=rows[:limit], total_rows=len(rows))

    def export_bytes(self, data: bytes, title: Optional[str] = DEFAULT_TITLE) -> bytes:
        return build_workbook_bytes(extract(data), title)

    def convert(self, source_path: str, output_dir: str, title: Optional[str] = DEFAULT_TITLE) -> JobResult:
        src = Path(source_path)
        if not src.is_file():
            log.warning("[convert] file not found: %s", src)
            return self._result("FAILED", "", str(src), {"error": "file_not_found"})

        try:
            data = self._read_source(src)
        except JobControllerError as e:
            return self._result("FAILED", "", str(src), {"error": str(e)})

        job_id = hashlib.sha256(data).hexdigest()[:16]
        try:
            rows = extract(data)
            wr = write_grid(rows, src.name, output_dir, title)
        except Exception as e:
            log.error("[convert] job_id=%s failed: %s", job_id, e)
            return self._result("FAILED", job_id, str(src), {"error": str(e)})

        log.info("[convert] job_id=%s %s -> %s (%d rows)", job_id, src.name, wr.excel_path, wr.row_count)
        return self._result("DONE", job_id, str(src), {
            "rows": wr.row_count,
            "excel_path": wr.excel_path,
            "sheet": wr.sheet_name,
            "write_status": wr.status,
        })

    def _read_source(self, path: Path) -> bytes:
        if not path.is_file():
            raise JobControllerError("file_not_found")
        try:
            return path.read_bytes()
        except OSError as e:
            raise JobControllerError("file_unreadable") from e

    def _result(self, status: str, job_id: str, source_path: str, details: dict) -> JobResult:
        return JobResult(job_id=job_id, source_path=source_path, status=status, details=details)
