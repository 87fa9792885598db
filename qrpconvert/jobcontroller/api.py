from __future__ import annotations

from typing import Optional

from qrpconvert.writer.api import DEFAULT_TITLE
from .jobcontroller import PREVIEW_ROW_LIMIT, JobController, JobControllerError
from .model import JobResult, PreviewResult


def preview(source_path: str, limit: int = PREVIEW_ROW_LIMIT) -> PreviewResult:
    """Public API (JobController)

    Contract:
    - First `limit` rows of the extracted grid plus the true total row count.
    - Missing/unreadable file -> JobControllerError("file_not_found" | "file_unreadable").
    """
    return JobController().preview(source_path, limit)


def preview_bytes(data: bytes, limit: int = PREVIEW_ROW_LIMIT) -> PreviewResult:
    return JobController().preview_bytes(data, limit)


def export_bytes(data: bytes, title: Optional[str] = DEFAULT_TITLE) -> bytes:
    """Raw QRP bytes -> xlsx bytes (download path)."""
    return JobController().export_bytes(data, title)


def convert(source_path: str, output_dir: str, title: Optional[str] = DEFAULT_TITLE) -> JobResult:
    """Public API (JobController)

    Contract:
    - job_id = sha256(file_bytes)[:16]
    - writes <output_dir>/<stem>.xlsx
    - DONE even for zero rows; FAILED only for missing/unreadable input or a write error.
    """
    return JobController().convert(source_path, output_dir, title)
