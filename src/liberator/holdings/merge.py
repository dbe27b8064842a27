"""Holding merge engine and catalog date resolver."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.engine import Connection

from liberator.database.item_repo import get_all_item_ids_for_holding, get_item_create_date
from liberator.database.record_repo import get_bib_create_date
from liberator.marc.record import Field, Record, Subfield
from liberator.utils.logging import get_logger

logger = get_logger(__name__)

BIB_TAGS_REPLACED = ("852", "866", "867", "868")
HOLDING_TAGS_MERGED = ("852", "856", "866", "867", "868")
CATALOG_DATE_TAG = "959"
HOLDING_ID_SUBFIELD = "0"
ELECTRONIC_LOCATION_PREFIX = "elf"


def is_electronic_resource(holdings: Sequence[Record]) -> bool:
    """True if any holding is shelved at an electronic (elf*) location."""
    return any((h.location or "").startswith(ELECTRONIC_LOCATION_PREFIX) for h in holdings)


def get_earliest_item_date(conn: Connection, holdings: Sequence[Record]) -> Optional[datetime]:
    """Earliest item create date across the holdings; None if there are no items."""
    dates: List[datetime] = []
    for holding in holdings:
        mfhd_id = holding.control_number
        if mfhd_id is None:
            continue
        for item_id in get_all_item_ids_for_holding(conn, int(mfhd_id)):
            created = get_item_create_date(conn, item_id)
            if created is not None:
                dates.append(created)
    return min(dates) if dates else None


def get_catalog_date(conn: Connection, bib_id: int, holdings: Sequence[Record]) -> Optional[datetime]:
    """
    Date the title entered the catalog.

    Electronic resources use the bib create date; everything else uses the
    earliest create date of any item on the holdings.
    """
    if is_electronic_resource(holdings):
        return get_bib_create_date(conn, bib_id)
    return get_earliest_item_date(conn, holdings)


def merge_holdings_into_bib(conn: Connection, bib: Record, holdings: Sequence[Record]) -> Record:
    """
    Fold holding records into their bib.

    Removes bib 852s and 86Xs, appends 852, 856 and 86X fields from each
    holding (each prefixed with $0 = holding id), then adds a 959 $a catalog
    date when one can be determined.

    Args:
        conn: Source database connection
        bib: Bib record
        holdings: Non-suppressed holding records of the bib

    Returns:
        New composite Record; the inputs are left untouched
    """
    merged = bib.without_fields(*BIB_TAGS_REPLACED)
    if not holdings:
        return merged

    holding_fields: List[Field] = []
    for holding in holdings:
        mfhd_id = holding.control_number or ""
        for f in holding.get_fields(*HOLDING_TAGS_MERGED):
            holding_fields.append(f.with_subfield_prepended(HOLDING_ID_SUBFIELD, mfhd_id))
    merged = merged.with_fields(holding_fields)

    bib_id = bib.control_number
    catalog_date = get_catalog_date(conn, int(bib_id), holdings) if bib_id else None
    if catalog_date is None:
        logger.debug("No catalog date for bib %s", bib_id)
        return merged
    return merged.with_fields(
        [Field(tag=CATALOG_DATE_TAG, subfields=(Subfield("a", str(catalog_date)),))]
    )
