from emfbuild import utf16_run
from qrpconvert.emfparser.api import TextFragment
from qrpconvert.fallbackscanner.api import scan_utf16_strings


def test_extracts_thai_utf16_run():
    buf = b"\xff\xff" + utf16_run("สวัสดี") + b"\x00" * 4
    assert scan_utf16_strings(buf) == [TextFragment(text="สวัสดี", x=0, y=0)]


def test_walks_back_over_leading_ascii():
    buf = b"\xff\xff" + utf16_run("No.สวัสดี") + b"\x00" * 4
    assert [f.text for f in scan_utf16_strings(buf)] == ["No.สวัสดี"]


def test_stops_at_invalid_code_unit():
    buf = b"\x00\x00" + "ทดสอบ".encode("utf-16-le") + b"\xff\xff" + "abc".encode("utf-16-le") + b"\x00" * 6
    assert [f.text for f in scan_utf16_strings(buf)] == ["ทดสอบ"]


def test_synthetic_positions_follow_discovery_order():
    buf = utf16_run("สวัสดี") + b"\xff\xff" + utf16_run("ทดสอบ") + b"\x00" * 4
    assert scan_utf16_strings(buf) == [
        TextFragment(text="สวัสดี", x=0, y=0),
        TextFragment(text="ทดสอบ", x=0, y=20),
    ]


def test_duplicates_are_dropped_keeping_first():
    buf = (
        utf16_run("สวัสดี")
        + b"\xff\xff"
        + utf16_run("สวัสดี")
        + b"\xff\xff"
        + utf16_run("ทดสอบ")
        + b"\x00" * 4
    )
    # y is assigned before deduplication
    assert scan_utf16_strings(buf) == [
        TextFragment(text="สวัสดี", x=0, y=0),
        TextFragment(text="ทดสอบ", x=0, y=40),
    ]


def test_ascii_only_runs_are_not_triggers():
    buf = utf16_run("Invoice number") + b"\x00" * 4
    assert scan_utf16_strings(buf) == []


def test_filtered_strings_are_skipped():
    buf = utf16_run("ก") + b"\xff\xff" + utf16_run("ทดสอบ") + b"\x00" * 4
    assert scan_utf16_strings(buf) == [TextFragment(text="ทดสอบ", x=0, y=0)]


def test_empty_and_tiny_buffers():
    assert scan_utf16_strings(b"") == []
    assert scan_utf16_strings(b"\x2a\x0e") == []
