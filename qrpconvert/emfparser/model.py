from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TextFragment:
    text: str
    x: int
    y: int


@dataclass(frozen=True)
class RecordHeader:
    type: int
    size: int


class ParserState(str, Enum):
    SCANNING = "scanning"
    WALKING_RECORDS = "walking_records"
    DONE = "done"
