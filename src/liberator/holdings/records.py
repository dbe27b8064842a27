"""Record access paths for bibs and holdings, suppression first."""

from typing import List, Optional, Union

from sqlalchemy.engine import Connection

from liberator.database.record_repo import get_bib_mfhd_ids, get_bib_segments, get_mfhd_segments
from liberator.holdings.merge import merge_holdings_into_bib
from liberator.marc.builder import build_record
from liberator.marc.record import Record
from liberator.suppression.filter import is_bib_suppressed, is_holding_suppressed
from liberator.utils.logging import get_logger

logger = get_logger(__name__)


def get_bib_without_holdings(conn: Connection, bib_id: int) -> Optional[Record]:
    return build_record(get_bib_segments(conn, bib_id))


def get_holding_record(conn: Connection, mfhd_id: int) -> Optional[Record]:
    """
    Get a holding record.

    Returns:
        Record, or None if the holding is suppressed or has no data
    """
    if is_holding_suppressed(conn, mfhd_id):
        logger.debug("Holding %s is suppressed", mfhd_id)
        return None
    return build_record(get_mfhd_segments(conn, mfhd_id))


def get_holding_records(conn: Connection, bib_id: int) -> List[Record]:
    """Non-suppressed holding records of a bib, in holding-id lookup order."""
    records: List[Record] = []
    for mfhd_id in get_bib_mfhd_ids(conn, bib_id):
        record = get_holding_record(conn, mfhd_id)
        if record is not None:
            records.append(record)
    return records


def get_bib_record(
    conn: Connection,
    bib_id: int,
    holdings: bool = True,
    holdings_in_bib: bool = True,
) -> Union[Record, List[Record], None]:
    """
    Get a bib record, by default with its holdings merged in.

    Args:
        conn: Source database connection
        bib_id: Bib id
        holdings: Include holdings at all
        holdings_in_bib: Merge holdings into the bib (852/856/86X + 959)
            rather than returning them alongside it

    Returns:
        Record if holdings=False or holdings_in_bib=True;
        [bib, *holdings] if holdings_in_bib=False;
        None if the bib is suppressed or has no data
    """
    if is_bib_suppressed(conn, bib_id):
        logger.debug("Bib %s is suppressed", bib_id)
        return None
    bib = get_bib_without_holdings(conn, bib_id)
    if bib is None:
        logger.debug("No record data for bib %s", bib_id)
        return None
    if not holdings:
        return bib
    holding_records = get_holding_records(conn, bib_id)
    if holdings_in_bib:
        return merge_holdings_into_bib(conn, bib, holding_records)
    return [bib, *holding_records]
