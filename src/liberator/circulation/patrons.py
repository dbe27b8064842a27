"""Patron lookup by barcode, institution id or net id."""

from typing import Optional

from sqlalchemy.engine import Connection

from liberator.circulation.models import PatronInfo
from liberator.database.patron_repo import get_patron_row
from liberator.utils.logging import get_logger

logger = get_logger(__name__)

STAFF_PATRON_GROUP = 3


def get_patron_info(conn: Connection, patron_id: str) -> Optional[PatronInfo]:
    """
    Look up a patron with an active barcode.

    Args:
        conn: Source database connection
        patron_id: 14-digit barcode, 9-digit institution id, or net id

    Returns:
        PatronInfo, or None when no active patron matches
    """
    row = get_patron_row(conn, patron_id)
    if row is None:
        logger.debug("No active patron for id %s", patron_id)
        return None
    patron_group = row["patron_group_id"]
    return PatronInfo(
        netid=row["netid"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        barcode=row["patron_barcode"],
        barcode_status=row["barcode_status"],
        barcode_status_date=row["barcode_status_date"],
        university_id=row["institution_id"],
        patron_group="staff" if patron_group == STAFF_PATRON_GROUP else patron_group,
        purge_date=row["purge_date"],
        expire_date=row["expire_date"],
        patron_id=row["patron_id"],
    )
