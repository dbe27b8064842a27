"""Immutable MARC record structures.

Records, fields and subfields are frozen; every "modification" returns a new
object so a record handed to a caller can never change underneath it.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pymarc


@dataclass(frozen=True)
class Subfield:
    code: str
    value: str


@dataclass(frozen=True)
class Field:
    """A tagged field. Control fields (001-009) carry data instead of subfields."""

    tag: str
    indicators: Tuple[str, str] = (" ", " ")
    subfields: Tuple[Subfield, ...] = ()
    data: Optional[str] = None

    @property
    def is_control_field(self) -> bool:
        return self.data is not None

    def get_subfields(self, *codes: str) -> List[str]:
        """Values of every subfield whose code is in codes, in source order."""
        return [sf.value for sf in self.subfields if sf.code in codes]

    def first_subfield(self, code: str) -> Optional[str]:
        values = self.get_subfields(code)
        return values[0] if values else None

    def with_subfield_prepended(self, code: str, value: str) -> "Field":
        return replace(self, subfields=(Subfield(code, value),) + self.subfields)

    def as_dict(self) -> Dict[str, Any]:
        if self.is_control_field:
            return {self.tag: self.data}
        return {
            self.tag: {
                "ind1": self.indicators[0],
                "ind2": self.indicators[1],
                "subfields": [{sf.code: sf.value} for sf in self.subfields],
            }
        }


@dataclass(frozen=True)
class Record:
    leader: str = ""
    fields: Tuple[Field, ...] = field(default_factory=tuple)

    def get_fields(self, *tags: str) -> List[Field]:
        """Every field whose tag is in tags, in record order."""
        return [f for f in self.fields if f.tag in tags]

    def first(self, tag: str) -> Optional[Field]:
        for f in self.fields:
            if f.tag == tag:
                return f
        return None

    @property
    def control_number(self) -> Optional[str]:
        f = self.first("001")
        return f.data if f is not None else None

    @property
    def location(self) -> Optional[str]:
        """Location code (852 $b) of a holding record."""
        f852 = self.first("852")
        return f852.first_subfield("b") if f852 is not None else None

    @property
    def call_number(self) -> str:
        """852 $h and $i joined with single spaces, in source order."""
        f852 = self.first("852")
        if f852 is None:
            return ""
        return " ".join(f852.get_subfields("h", "i"))

    def without_fields(self, *tags: str) -> "Record":
        return replace(self, fields=tuple(f for f in self.fields if f.tag not in tags))

    def with_fields(self, new_fields: Iterable[Field]) -> "Record":
        return replace(self, fields=self.fields + tuple(new_fields))

    def as_dict(self) -> Dict[str, Any]:
        """MARC-in-JSON shape: leader plus a list of single-key field dicts."""
        return {"leader": self.leader, "fields": [f.as_dict() for f in self.fields]}

    def to_pymarc(self) -> pymarc.Record:
        """Convert to a pymarc record for MARC21/MARCXML serialization."""
        record = pymarc.Record(force_utf8=True)
        if len(self.leader) == 24:
            record.leader = pymarc.Leader(self.leader)
        for f in self.fields:
            if f.is_control_field:
                record.add_field(pymarc.Field(tag=f.tag, data=f.data))
            else:
                record.add_field(
                    pymarc.Field(
                        tag=f.tag,
                        indicators=pymarc.Indicators(*f.indicators),
                        subfields=[pymarc.Subfield(sf.code, sf.value) for sf in f.subfields],
                    )
                )
        return record
