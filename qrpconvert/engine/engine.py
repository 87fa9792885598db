from __future__ import annotations

import logging
from typing import List

from qrpconvert.emfparser.api import TextFragment, find_emf_start, parse_emf_records
from qrpconvert.fallbackscanner.api import scan_utf16_strings
from qrpconvert.reconstructor.api import Grid, group_text_by_position

log = logging.getLogger(__name__)


class Engine:
    """Stateless: one instance per call, nothing shared between calls."""

    def extract_fragments(self, data: bytes) -> List[TextFragment]:
        buf = bytes(data)
        if find_emf_start(buf) is None:
            fragments = scan_utf16_strings(buf)
            log.debug("no EMF signature, fallback scan found %d fragments", len(fragments))
            return fragments

        fragments = parse_emf_records(buf)
        if fragments:
            log.debug("EMF records yielded %d fragments", len(fragments))
            return fragments

        fragments = scan_utf16_strings(buf)
        log.debug("EMF records yielded no text, fallback scan found %d fragments", len(fragments))
        return fragments

    def extract(self, data: bytes) -> Grid:
        try:
            fragments = self.extract_fragments(data)
        except Exception:
            log.exception("text extraction failed, returning empty grid")
            return []
        rows = group_text_by_position(fragments)
        log.info("extracted %d fragments into %d rows", len(fragments), len(rows))
        return rows
