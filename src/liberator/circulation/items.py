"""Item status resolver: normalized item data for holdings."""

from typing import Dict, List, Optional

from sqlalchemy.engine import Connection, RowMapping

from liberator.circulation.models import Item
from liberator.database import item_repo
from liberator.utils.logging import get_logger

logger = get_logger(__name__)


def _item_from_row(row: RowMapping, full: bool) -> Item:
    """Convert an item info row to an Item model."""
    values = {
        "id": row["item_id"],
        "status": row["item_status_desc"],
        "on_reserve": row["on_reserve"] == "Y",
        "temp_location": row["temp_location"],
        "perm_location": row["perm_location"],
    }
    if full:
        values.update(
            enum=row["item_enum"],
            chron=row["chron"],
            copy_number=row["copy_number"],
            item_sequence_number=row["item_sequence_number"],
            status_date=row["item_status_date"],
            barcode=row["item_barcode"],
            create_date=row["create_date"],
        )
    return Item(**values)


def get_info_for_item(conn: Connection, item_id: int, full: bool = True) -> Optional[Item]:
    """
    Get normalized info for one item.

    Args:
        conn: Source database connection
        item_id: Item id
        full: All attributes (listing views) or the brief availability set

    Returns:
        Item, or None when the item is missing or has only excluded statuses
    """
    row = item_repo.get_item_row(conn, item_id, full=full)
    if row is None:
        logger.debug("No circulating item found: %s", item_id)
        return None
    return _item_from_row(row, full)


def get_item_ids_for_holding(conn: Connection, mfhd_id: int) -> List[int]:
    return item_repo.get_item_ids_for_holding(conn, mfhd_id)


def get_items_for_holding(conn: Connection, mfhd_id: int) -> List[Item]:
    """Full info for every circulating item of a holding, highest sequence number first."""
    items: List[Item] = []
    for item_id in item_repo.get_item_ids_for_holding(conn, mfhd_id):
        item = get_info_for_item(conn, item_id)
        if item is not None:
            items.append(item)
    return sort_by_sequence(items)


def sort_by_sequence(items: List[Item]) -> List[Item]:
    """Descending item sequence number; items without one go last."""
    return sorted(
        items,
        key=lambda i: (i.item_sequence_number is None, -(i.item_sequence_number or 0)),
    )


def get_item_statuses(conn: Connection) -> Dict[int, str]:
    return item_repo.get_item_statuses(conn)


def get_current_issues(conn: Connection, mfhd_id: int) -> Optional[List[str]]:
    """
    Received serial issues for a holding.

    Returns:
        List of enumeration/chronology strings, or None when there are none
    """
    issues = [issue for issue in item_repo.get_current_issue_rows(conn, mfhd_id) if issue is not None]
    if not issues:
        logger.debug("No current issues for holding %s", mfhd_id)
        return None
    return issues
