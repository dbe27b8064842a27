"""Repository for patron rows."""

import re
from typing import Optional

from sqlalchemy.engine import Connection, RowMapping

from liberator.database import queries

BARCODE_PATTERN = re.compile(r"^\d{14}$")
INSTITUTION_ID_PATTERN = re.compile(r"^\d{9}$")


def determine_id_type(patron_id: str) -> str:
    """Classify a patron identifier: barcode, institution_id or netid."""
    if BARCODE_PATTERN.match(patron_id):
        return "barcode"
    if INSTITUTION_ID_PATTERN.match(patron_id):
        return "institution_id"
    return "netid"


_QUERIES_BY_ID_TYPE = {
    "barcode": queries.PATRON_INFO_BY_BARCODE,
    "institution_id": queries.PATRON_INFO_BY_INSTITUTION_ID,
    "netid": queries.PATRON_INFO_BY_NETID,
}


def get_patron_row(conn: Connection, patron_id: str) -> Optional[RowMapping]:
    """Patron row with its active barcode, looked up by whichever id was given."""
    query = _QUERIES_BY_ID_TYPE[determine_id_type(patron_id)]
    return conn.execute(query, {"patron_id": patron_id}).mappings().first()
