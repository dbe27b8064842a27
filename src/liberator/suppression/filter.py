"""Suppression filter: administrative hiding of bib and holding records."""

from sqlalchemy.engine import Connection

from liberator.database.record_repo import get_bib_suppress_flag, get_mfhd_suppress_flag

SUPPRESSED_FLAG = "Y"


def is_bib_suppressed(conn: Connection, bib_id: int) -> bool:
    """True if the bib is hidden from public view. Unknown bibs are not suppressed."""
    return get_bib_suppress_flag(conn, bib_id) == SUPPRESSED_FLAG


def is_holding_suppressed(conn: Connection, mfhd_id: int) -> bool:
    """True if the holding is hidden from public view. Unknown holdings are not suppressed."""
    return get_mfhd_suppress_flag(conn, mfhd_id) == SUPPRESSED_FLAG
