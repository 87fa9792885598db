from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from qrpconvert.jobcontroller.api import PREVIEW_ROW_LIMIT, JobControllerError, convert, preview
from qrpconvert.writer.api import DEFAULT_TITLE

SEPARATOR = "=" * 78


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="qrpconvert",
        description="Extract text from QRP report files and convert it to Excel.",
    )
    p.add_argument("files", nargs="+", type=Path, help="QRP files to process.")
    p.add_argument("--output", type=Path, default=Path("output"), help="Directory for .xlsx files.")
    p.add_argument("--preview", action="store_true", help="Print extracted rows instead of writing Excel.")
    p.add_argument("--limit", type=int, default=PREVIEW_ROW_LIMIT, help="Rows shown in preview mode.")
    p.add_argument("--no-title", action="store_true", help="Omit the title row in the sheet.")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def _print_preview(path: Path, limit: int) -> bool:
    try:
        res = preview(str(path), limit)
    except JobControllerError as e:
        print(f"error: {e}")
        return False
    print(f"rows: {res.total_rows}")
    for row in res.rows:
        print(" | ".join(row))
    if res.truncated:
        print(f"... showing first {len(res.rows)} of {res.total_rows} rows")
    return True


def _run_convert(path: Path, output_dir: Path, title: str | None) -> bool:
    res = convert(str(path), str(output_dir), title)
    print(f"status: {res.status}")
    print(f"job_id: {res.job_id}")
    for k, v in res.details.items():
        print(f"{k}: {v}")
    return res.status == "DONE"


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    title = None if args.no_title else DEFAULT_TITLE
    ok = True
    for path in args.files:
        print(SEPARATOR)
        print(f"FILE: {path.name}")
        print(SEPARATOR)
        if args.preview:
            ok = _print_preview(path, args.limit) and ok
        else:
            ok = _run_convert(path, args.output, title) and ok
        print()

    return 0 if ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
