from dataclasses import dataclass


@dataclass(frozen=True)
class WriteResult:
    excel_path: str
    sheet_name: str
    row_count: int
    status: str  # created|replaced
