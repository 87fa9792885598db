from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class JobResult:
    job_id: str
    source_path: str
    status: str  # DONE|FAILED
    details: Dict[str, object]


@dataclass(frozen=True)
class PreviewResult:
    rows: List[List[str]]
    total_rows: int

    @property
    def truncated(self) -> bool:
        return self.total_rows > len(self.rows)
