from __future__ import annotations

import logging
import struct
from typing import Callable, List, Optional

from qrpconvert.decoder.api import decode_legacy_thai, decode_utf16le
from qrpconvert.textfilter.api import is_ignored_text
from .model import ParserState, RecordHeader, TextFragment

log = logging.getLogger(__name__)


EMF_SIGNATURE: bytes = b" EMF"
# " EMF" sits at byte 40 of the EMR_HEADER record.
EMF_HEADER_OFFSET: int = 40

EMR_EOF: int = 0x0E
EMR_EXTTEXTOUTA: int = 0x53
EMR_EXTTEXTOUTW: int = 0x54

RECORD_HEADER_SIZE: int = 8
MIN_TEXT_RECORD_SIZE: int = 76
MAX_CHARS: int = 1000

# EMR_EXTTEXTOUT layout (offsets from record start):
#   8 rclBounds, 24 iGraphicsMode, 28 exScale, 32 eyScale,
#   36 ptlReference.x, 40 ptlReference.y, 44 nChars, 48 offString
_TEXT_FIELDS = struct.Struct("<iiII")
_TEXT_FIELDS_OFFSET: int = 36
_RECORD_HEADER = struct.Struct("<II")


class EmfParser:
    """Walks the EMF record stream embedded in a QRP container."""

    def find_emf_start(self, buf: bytes) -> Optional[int]:
        i = buf.find(EMF_SIGNATURE, 0, max(len(buf) - 1, 0))
        if i == -1:
            return None
        return max(i - EMF_HEADER_OFFSET, 0)

    def find_next_emf(self, buf: bytes, start_offset: int) -> Optional[int]:
        i = buf.find(EMF_SIGNATURE, start_offset, max(len(buf) - 1, 0))
        if i == -1:
            return None
        emf_start = i - EMF_HEADER_OFFSET
        return emf_start if emf_start > start_offset else None

    def parse(self, buf: bytes) -> List[TextFragment]:
        fragments: List[TextFragment] = []
        state = ParserState.SCANNING
        offset = 0

        while state is not ParserState.DONE:
            if state is ParserState.SCANNING:
                start = self.find_emf_start(buf)
                if start is None:
                    log.debug("no EMF signature found")
                    state = ParserState.DONE
                else:
                    offset = start
                    state = ParserState.WALKING_RECORDS
                continue

            header = self._read_header(buf, offset)
            if header is None:
                state = ParserState.DONE
                continue

            if header.type == EMR_EXTTEXTOUTW and header.size > MIN_TEXT_RECORD_SIZE:
                self._collect(self.parse_ext_text_out_w, buf, offset, fragments)
            elif header.type == EMR_EXTTEXTOUTA and header.size > MIN_TEXT_RECORD_SIZE:
                self._collect(self.parse_ext_text_out_a, buf, offset, fragments)
            elif header.type == EMR_EOF:
                next_start = self.find_next_emf(buf, offset + header.size)
                if next_start is None:
                    state = ParserState.DONE
                else:
                    log.debug("continuing into embedded EMF at offset %d", next_start)
                    offset = next_start
                continue

            offset += header.size

        return fragments

    def parse_ext_text_out_w(self, buf: bytes, offset: int) -> Optional[TextFragment]:
        return self._parse_ext_text_out(buf, offset, 2, decode_utf16le)

    def parse_ext_text_out_a(self, buf: bytes, offset: int) -> Optional[TextFragment]:
        return self._parse_ext_text_out(buf, offset, 1, decode_legacy_thai)

    def _parse_ext_text_out(
        self,
        buf: bytes,
        offset: int,
        char_width: int,
        decode: Callable[[bytes], str],
    ) -> Optional[TextFragment]:
        record_size = _RECORD_HEADER.unpack_from(buf, offset)[1]
        ref_x, ref_y, n_chars, off_string = _TEXT_FIELDS.unpack_from(buf, offset + _TEXT_FIELDS_OFFSET)

        if n_chars == 0 or n_chars > MAX_CHARS or off_string + n_chars * char_width > record_size:
            return None

        string_start = offset + off_string
        string_end = string_start + n_chars * char_width
        if string_end > len(buf):
            return None

        text = decode(buf[string_start:string_end])
        if is_ignored_text(text):
            return None
        return TextFragment(text=text.strip(), x=ref_x, y=ref_y)

    def _read_header(self, buf: bytes, offset: int) -> Optional[RecordHeader]:
        if offset + RECORD_HEADER_SIZE > len(buf):
            return None
        record_type, record_size = _RECORD_HEADER.unpack_from(buf, offset)
        if record_size < RECORD_HEADER_SIZE or record_size > len(buf) - offset:
            log.debug("record stream ends at offset %d (type=0x%02x size=%d)", offset, record_type, record_size)
            return None
        return RecordHeader(type=record_type, size=record_size)

    def _collect(
        self,
        parse_record: Callable[[bytes, int], Optional[TextFragment]],
        buf: bytes,
        offset: int,
        fragments: List[TextFragment],
    ) -> None:
        try:
            fragment = parse_record(buf, offset)
        except (struct.error, ValueError) as e:
            log.debug("skipping malformed text record at offset %d: %s", offset, e)
            return
        if fragment is not None:
            fragments.append(fragment)
