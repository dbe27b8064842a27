"""Repository for item, item status and serial issue rows."""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.engine import Connection, RowMapping

from liberator.database import queries


def get_item_ids_for_holding(conn: Connection, mfhd_id: int) -> List[int]:
    """
    Ids of the holding's circulating items, highest sequence number first.

    Items whose every status row is excluded (terminal) are left out.
    """
    return list(conn.execute(queries.MFHD_ITEM_IDS, {"mfhd_id": mfhd_id}).scalars())


def get_all_item_ids_for_holding(conn: Connection, mfhd_id: int) -> List[int]:
    """Ids of every item attached to the holding, whatever its status."""
    return list(conn.execute(queries.MFHD_ALL_ITEM_IDS, {"mfhd_id": mfhd_id}).scalars())


def get_item_row(conn: Connection, item_id: int, full: bool = True) -> Optional[RowMapping]:
    """
    Get the status row for one item.

    Args:
        conn: Source database connection
        item_id: Item id
        full: Full column set (listing views) or the brief availability set

    Returns:
        Row mapping, or None if the item is missing or has only excluded statuses
    """
    query = queries.FULL_ITEM_INFO if full else queries.BRIEF_ITEM_INFO
    return conn.execute(query, {"item_id": item_id}).mappings().first()


def get_item_create_date(conn: Connection, item_id: int) -> Optional[datetime]:
    return conn.execute(queries.ITEM_CREATE_DATE, {"item_id": item_id}).scalar()


def get_item_statuses(conn: Connection) -> Dict[int, str]:
    """Item status code -> description."""
    return {code: desc for code, desc in conn.execute(queries.ITEM_STATUSES)}


def get_current_issue_rows(conn: Connection, mfhd_id: int) -> List[str]:
    """Enumeration/chronology of received serial issues for a holding."""
    return list(conn.execute(queries.CURRENT_PERIODICALS, {"mfhd_id": mfhd_id}).scalars())
