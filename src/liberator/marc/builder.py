"""Decode raw Voyager record segments into immutable MARC records."""

import re
from typing import Iterable, Optional, Union

import pymarc

from liberator.marc.record import Field, Record, Subfield

Segment = Union[bytes, bytearray, memoryview, str]

INVALID_XML_CHARS = re.compile(r"[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD]")


def valid_xml(value: str) -> str:
    """Strip characters that are not allowed in XML 1.0 text."""
    return INVALID_XML_CHARS.sub("", value)


def _segment_bytes(segment: Segment) -> bytes:
    if isinstance(segment, str):
        return segment.encode("utf-8")
    return bytes(segment)


def _indicator(value: Optional[str]) -> str:
    cleaned = valid_xml(value or "")
    return cleaned[:1] or " "


def _from_pymarc_field(pm_field: pymarc.Field) -> Field:
    if pm_field.is_control_field():
        return Field(tag=pm_field.tag, data=valid_xml(pm_field.data or ""))
    return Field(
        tag=pm_field.tag,
        indicators=(_indicator(pm_field.indicator1), _indicator(pm_field.indicator2)),
        subfields=tuple(
            Subfield(sf.code, valid_xml(sf.value or "")) for sf in pm_field.subfields
        ),
    )


def build_record(segments: Iterable[Segment]) -> Optional[Record]:
    """
    Build a Record from the ordered raw segments of one bib or holding.

    Segments are concatenated and decoded as ISO 2709 with UTF-8 data; byte
    sequences that are not valid UTF-8 are dropped, and characters outside the
    XML allowlist are stripped from every decoded value. The allowlist is
    applied per value because the ISO 2709 delimiters themselves fall outside it.

    Args:
        segments: record_segment values in seqnum order

    Returns:
        Record, or None when there are no segments
    """
    raw = b"".join(_segment_bytes(s) for s in segments)
    if not raw:
        return None

    pm_record = pymarc.Record(data=raw, force_utf8=True, utf8_handling="ignore")
    return Record(
        leader=valid_xml(str(pm_record.leader)),
        fields=tuple(_from_pymarc_field(f) for f in pm_record.fields),
    )
