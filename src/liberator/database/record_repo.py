"""Repository for bib and holding (mfhd) record rows."""

from datetime import datetime
from typing import List, Optional, Union

from sqlalchemy.engine import Connection

from liberator.database import queries


def get_bib_segments(conn: Connection, bib_id: int) -> List[Union[bytes, str]]:
    """Raw bib record segments in seqnum order."""
    return [row[0] for row in conn.execute(queries.BIB_SEGMENTS, {"bib_id": bib_id})]


def get_mfhd_segments(conn: Connection, mfhd_id: int) -> List[Union[bytes, str]]:
    """Raw holding record segments in seqnum order."""
    return [row[0] for row in conn.execute(queries.MFHD_SEGMENTS, {"mfhd_id": mfhd_id})]


def get_bib_suppress_flag(conn: Connection, bib_id: int) -> Optional[str]:
    return conn.execute(queries.BIB_SUPPRESSED, {"bib_id": bib_id}).scalar()


def get_mfhd_suppress_flag(conn: Connection, mfhd_id: int) -> Optional[str]:
    return conn.execute(queries.MFHD_SUPPRESSED, {"mfhd_id": mfhd_id}).scalar()


def get_bib_mfhd_ids(conn: Connection, bib_id: int) -> List[int]:
    """Holding ids attached to a bib, in the order the database returns them."""
    return list(conn.execute(queries.MFHD_IDS, {"bib_id": bib_id}).scalars())


def get_bib_create_date(conn: Connection, bib_id: int) -> Optional[datetime]:
    return conn.execute(queries.BIB_CREATE_DATE, {"bib_id": bib_id}).scalar()
