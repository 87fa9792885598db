from pathlib import Path

import pytest
from openpyxl import load_workbook

from emfbuild import emf, text_w
from qrpconvert.jobcontroller.api import JobControllerError, convert, export_bytes, preview, preview_bytes


def _report(n_rows: int) -> bytes:
    return emf(*(text_w(f"Row{i:03d}", 10, i * 30) for i in range(n_rows)))


def test_preview_truncates_and_reports_total():
    res = preview_bytes(_report(150))
    assert res.total_rows == 150
    assert len(res.rows) == 100
    assert res.truncated
    assert res.rows[0] == ["Row000"]
    assert res.rows[-1] == ["Row099"]


def test_preview_small_report(tmp_path: Path):
    p = tmp_path / "small.qrp"
    p.write_bytes(_report(3))
    res = preview(str(p), limit=10)
    assert res.rows == [["Row000"], ["Row001"], ["Row002"]]
    assert res.total_rows == 3
    assert not res.truncated


def test_preview_missing_file(tmp_path: Path):
    with pytest.raises(JobControllerError, match="file_not_found"):
        preview(str(tmp_path / "missing.qrp"))


def test_preview_rejects_negative_limit():
    with pytest.raises(JobControllerError):
        preview_bytes(b"", limit=-1)


def test_convert_writes_excel(tmp_path: Path):
    p = tmp_path / "invoice.QRP"
    p.write_bytes(emf(text_w("Invoice", 10, 5), text_w("#1023", 50, 5)))
    res = convert(str(p), str(tmp_path / "out"))
    assert res.status == "DONE"
    assert len(res.job_id) == 16
    assert res.details["rows"] == 1
    excel_path = Path(res.details["excel_path"])
    assert excel_path.name == "invoice.xlsx"
    ws = load_workbook(excel_path).active
    assert [ws.cell(3, c).value for c in (1, 2)] == ["Invoice", "#1023"]


def test_convert_without_text_is_done_with_zero_rows(tmp_path: Path):
    p = tmp_path / "blank.qrp"
    p.write_bytes(b"\x00\x01\x02\x03" * 16)
    res = convert(str(p), str(tmp_path / "out"))
    assert res.status == "DONE"
    assert res.details["rows"] == 0


def test_convert_missing_file(tmp_path: Path):
    res = convert(str(tmp_path / "missing.qrp"), str(tmp_path / "out"))
    assert res.status == "FAILED"
    assert res.details == {"error": "file_not_found"}


def test_convert_reports_write_errors(tmp_path: Path):
    p = tmp_path / "invoice.qrp"
    p.write_bytes(emf(text_w("Invoice", 10, 5)))
    out = tmp_path / "out"
    out.mkdir()
    (out / ".excel_writer.lock").touch()
    res = convert(str(p), str(out))
    assert res.status == "FAILED"
    assert res.details["error"] == "excel_writer_lock_exists"


def test_export_bytes_is_an_xlsx():
    data = export_bytes(emf(text_w("Invoice", 10, 5)), title=None)
    assert data[:2] == b"PK"


def test_convert_survives_control_characters_and_formula_like_text(tmp_path: Path):
    p = tmp_path / "ledger.qrp"
    p.write_bytes(emf(text_w("Amount\x01Due", 10, 5), text_w("=====", 10, 50)))
    res = convert(str(p), str(tmp_path / "out"), title=None)
    assert res.status == "DONE"
    ws = load_workbook(res.details["excel_path"]).active
    assert ws.cell(1, 1).value == "AmountDue"
    assert ws.cell(2, 1).value == "====="
    assert ws.cell(2, 1).data_type == "s"
