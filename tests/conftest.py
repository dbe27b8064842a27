"""Pytest configuration and fixtures."""

from datetime import datetime
from itertools import count
from typing import Iterable, List, Optional, Sequence, Tuple

import pymarc
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from liberator.circulation.locations import HoldingLocationLookup
from liberator.circulation.models import HoldingLocation
from liberator.database.schema import (
    Base,
    BibData,
    BibMaster,
    BibMfhd,
    Component,
    IssuesReceived,
    Item,
    ItemBarcode,
    ItemStatus,
    ItemStatusType,
    LineItem,
    LineItemCopyStatus,
    Location,
    MfhdData,
    MfhdItem,
    MfhdMaster,
    Patron,
    PatronBarcode,
    PurchaseOrder,
    SerialIssues,
    Subscription,
)

FieldSpec = Tuple[str, Sequence[Tuple[str, str]]]

SEGMENT_SIZE = 50

STATUS_TYPES = {
    1: "Not Charged",
    2: "Charged",
    16: "Damaged",
    20: "Withdrawn",
    22: "In Process",
}


def marc_bytes(control_number: int, fields: Iterable[FieldSpec] = ()) -> bytes:
    """ISO 2709 bytes for a record with the given 001 and data fields."""
    record = pymarc.Record(force_utf8=True)
    record.add_field(pymarc.Field(tag="001", data=str(control_number)))
    for tag, subfields in fields:
        record.add_field(
            pymarc.Field(
                tag=tag,
                indicators=pymarc.Indicators("0", " "),
                subfields=[pymarc.Subfield(code, value) for code, value in subfields],
            )
        )
    return record.as_marc()


def split_segments(raw: bytes, size: int = SEGMENT_SIZE) -> List[bytes]:
    return [raw[i:i + size] for i in range(0, len(raw), size)]


class VoyagerSeeder:
    """Inserts Voyager rows; every add_* call commits."""

    def __init__(self, session: Session):
        self.session = session
        self._ids = count(1000)
        self.location_ids = {}

    def _add(self, *rows) -> None:
        self.session.add_all(rows)
        self.session.commit()

    def location(self, code: str, display_name: Optional[str] = None, suppress: str = "N") -> int:
        if code in self.location_ids:
            return self.location_ids[code]
        location_id = next(self._ids)
        self._add(
            Location(
                location_id=location_id,
                location_code=code,
                location_display_name=display_name or code,
                suppress_in_opac=suppress,
            )
        )
        self.location_ids[code] = location_id
        return location_id

    def bib(
        self,
        bib_id: int,
        fields: Iterable[FieldSpec] = (("245", (("a", "A title"),)),),
        suppress: str = "N",
        create_date: Optional[datetime] = None,
        raw: Optional[bytes] = None,
    ) -> None:
        raw = raw if raw is not None else marc_bytes(bib_id, fields)
        rows = [BibMaster(bib_id=bib_id, suppress_in_opac=suppress, create_date=create_date)]
        rows += [
            BibData(bib_id=bib_id, seqnum=seq, record_segment=segment)
            for seq, segment in enumerate(split_segments(raw), start=1)
        ]
        self._add(*rows)

    def holding(
        self,
        mfhd_id: int,
        bib_id: int,
        location: str,
        call_number: Sequence[Tuple[str, str]] = (),
        fields: Iterable[FieldSpec] = (),
        suppress: str = "N",
    ) -> None:
        location_id = self.location(location)
        f852: FieldSpec = ("852", (("b", location),) + tuple(call_number))
        raw = marc_bytes(mfhd_id, [f852, *fields])
        rows = [
            MfhdMaster(mfhd_id=mfhd_id, location_id=location_id, suppress_in_opac=suppress),
            BibMfhd(bib_id=bib_id, mfhd_id=mfhd_id),
        ]
        rows += [
            MfhdData(mfhd_id=mfhd_id, seqnum=seq, record_segment=segment)
            for seq, segment in enumerate(split_segments(raw), start=1)
        ]
        self._add(*rows)

    def item(
        self,
        item_id: int,
        mfhd_id: int,
        perm_location: str,
        status: int = 1,
        sequence: Optional[int] = 1,
        temp_location: Optional[str] = None,
        on_reserve: str = "N",
        copy_number: Optional[int] = 1,
        enum: Optional[str] = None,
        chron: Optional[str] = None,
        barcode: Optional[str] = None,
        create_date: Optional[datetime] = None,
        extra_statuses: Sequence[int] = (),
    ) -> None:
        rows = [
            Item(
                item_id=item_id,
                perm_location=self.location(perm_location),
                temp_location=self.location(temp_location) if temp_location else None,
                on_reserve=on_reserve,
                copy_number=copy_number,
                item_sequence_number=sequence,
                create_date=create_date,
            ),
            MfhdItem(item_id=item_id, mfhd_id=mfhd_id, item_enum=enum, chron=chron),
            ItemStatus(item_id=item_id, item_status=status, item_status_date=datetime(2020, 1, 1)),
        ]
        rows += [ItemStatus(item_id=item_id, item_status=extra) for extra in extra_statuses]
        if barcode:
            rows.append(ItemBarcode(item_id=item_id, item_barcode=barcode, barcode_status=1))
        self._add(*rows)

    def order(
        self,
        bib_id: int,
        po_status: int,
        li_status: int,
        status_date: Optional[datetime] = None,
        mfhd_id: Optional[int] = None,
    ) -> None:
        po_id, line_item_id, copy_id = next(self._ids), next(self._ids), next(self._ids)
        self._add(
            PurchaseOrder(po_id=po_id, po_status=po_status),
            LineItem(line_item_id=line_item_id, po_id=po_id, bib_id=bib_id),
            LineItemCopyStatus(
                copy_id=copy_id,
                line_item_id=line_item_id,
                mfhd_id=mfhd_id,
                line_item_status=li_status,
                status_date=status_date,
            ),
        )

    def issue(self, mfhd_id: int, enumchron: str, received: int = 1, opac_suppressed: int = 1) -> None:
        ids = [next(self._ids) for _ in range(5)]
        po_id, line_item_id, copy_id, subscription_id, component_id = ids
        issue_id = next(self._ids)
        self._add(
            PurchaseOrder(po_id=po_id, po_status=1),
            LineItem(line_item_id=line_item_id, po_id=po_id, bib_id=0),
            LineItemCopyStatus(copy_id=copy_id, line_item_id=line_item_id, mfhd_id=mfhd_id, line_item_status=1),
            Subscription(subscription_id=subscription_id, line_item_id=line_item_id),
            Component(component_id=component_id, subscription_id=subscription_id),
            IssuesReceived(issue_id=issue_id, component_id=component_id, opac_suppressed=opac_suppressed),
            SerialIssues(issue_id=issue_id, component_id=component_id, enumchron=enumchron, received=received),
        )

    def patron(
        self,
        patron_id: int,
        netid: str,
        institution_id: str,
        barcode: str,
        patron_group_id: int = 1,
        barcode_status: int = 1,
    ) -> None:
        self._add(
            Patron(
                patron_id=patron_id,
                title=netid,
                first_name="Ada",
                last_name="Lovelace",
                institution_id=institution_id,
                expire_date=datetime(2030, 6, 30),
            ),
            PatronBarcode(
                patron_barcode_id=next(self._ids),
                patron_id=patron_id,
                patron_barcode=barcode,
                barcode_status=barcode_status,
                patron_group_id=patron_group_id,
            ),
        )


@pytest.fixture
def engine():
    """In-memory Voyager mirror shared by every connection in a test."""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine):
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    session.add_all(
        ItemStatusType(item_status_type=code, item_status_desc=desc)
        for code, desc in STATUS_TYPES.items()
    )
    session.commit()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def voyager(session) -> VoyagerSeeder:
    return VoyagerSeeder(session)


@pytest.fixture
def conn(engine, voyager):
    """Connection for engine calls; seed through `voyager` before querying."""
    connection = engine.connect()
    try:
        yield connection
    finally:
        connection.close()


@pytest.fixture
def locations() -> HoldingLocationLookup:
    return HoldingLocationLookup(
        [
            HoldingLocation(code="f", label="Stacks"),
            HoldingLocation(code="anxb", label="Annex B"),
            HoldingLocation(code="sa", label="Marquand Library", always_requestable=True),
            HoldingLocation(code="sv", label="Mendel Music Library - Reference"),
            HoldingLocation(code="svref", label="Music reference desk"),
            HoldingLocation(code="elf1", label="Online"),
        ]
    )
