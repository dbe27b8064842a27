"""Availability decision engine.

Availability is decided per holding record, first match wins:

1. The holding has circulating items: the item with the highest sequence
   number decides. "Limited" if the item's permanent location is limited
   access, else the item's Voyager status.
2. No items, and the bib has a qualifying order: the order status.
3. No items, electronic location (elf*): "Online".
4. No items, limited-access location: "Limited".
5. Otherwise "On Shelf".
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.engine import Connection

from liberator.availability.models import HoldingAvailability, ItemAvailability
from liberator.circulation.items import get_info_for_item, get_item_ids_for_holding, get_items_for_holding
from liberator.circulation.locations import HoldingLocationLookup, is_limited_access
from liberator.circulation.models import Item
from liberator.circulation.orders import get_order_status
from liberator.holdings.merge import ELECTRONIC_LOCATION_PREFIX
from liberator.holdings.records import get_holding_records
from liberator.marc.record import Record
from liberator.utils.logging import get_logger

logger = get_logger(__name__)

ONLINE = "Online"
LIMITED = "Limited"
ON_SHELF = "On Shelf"

BRIEF_HOLDING_LIMIT = 2

_UNSET = object()


def reserve_location(item: Item) -> Optional[str]:
    """Where an on-reserve item sits: its temp location, else its perm location."""
    if not item.on_reserve:
        return None
    return item.temp_location or item.perm_location


def _status_without_items(
    location: str,
    order_status: Optional[str],
    locations: HoldingLocationLookup,
) -> str:
    if order_status is not None:
        return order_status
    if location.startswith(ELECTRONIC_LOCATION_PREFIX):
        return ONLINE
    if is_limited_access(location, locations):
        return LIMITED
    return ON_SHELF


def _holding_availability(
    conn: Connection,
    holding: Record,
    order_status_for_bib,
    locations: HoldingLocationLookup,
) -> HoldingAvailability:
    location = holding.location or ""
    item_ids = get_item_ids_for_holding(conn, int(holding.control_number))
    more_items = len(item_ids) > 1

    item = get_info_for_item(conn, item_ids[0], full=False) if item_ids else None
    if item is None:
        return HoldingAvailability(
            status=_status_without_items(location, order_status_for_bib(), locations),
            location=location,
            more_items=more_items,
        )

    status = LIMITED if is_limited_access(item.perm_location, locations) else item.status
    return HoldingAvailability(
        status=status or "",
        location=location,
        more_items=more_items,
        on_reserve=reserve_location(item),
    )


def get_bib_availability(
    conn: Connection,
    bib_id: int,
    locations: HoldingLocationLookup,
    full: bool = False,
) -> Dict[int, HoldingAvailability]:
    """
    Availability of one bib's holdings, keyed by holding id.

    Args:
        conn: Source database connection
        bib_id: Bib id
        locations: Holding-location metadata for the limited-access rule
        full: All holdings, or only the first two in lookup order
    """
    holdings = get_holding_records(conn, bib_id)
    if not full:
        holdings = holdings[:BRIEF_HOLDING_LIMIT]

    order_status = _UNSET

    # The bib's order status is applied to every holding without items,
    # whichever holding the order was actually placed for.
    def order_status_for_bib() -> Optional[str]:
        nonlocal order_status
        if order_status is _UNSET:
            order_status = get_order_status(conn, bib_id)
        return order_status

    availability: Dict[int, HoldingAvailability] = {}
    for holding in holdings:
        if holding.control_number is None:
            logger.warning("Holding record without 001 on bib %s skipped", bib_id)
            continue
        mfhd_id = int(holding.control_number)
        availability[mfhd_id] = _holding_availability(conn, holding, order_status_for_bib, locations)
    return availability


def get_availability(
    conn: Connection,
    bib_ids: Iterable[int],
    locations: HoldingLocationLookup,
    full: bool = False,
):
    """
    Availability for bibs.

    Args:
        conn: Source database connection
        bib_ids: Bib ids
        locations: Holding-location metadata
        full: True for every holding of a single bib; False (default) for the
            first two holdings of each bib

    Returns:
        full=False: {bib_id: {holding_id: HoldingAvailability}}
        full=True: {holding_id: HoldingAvailability} for the first bib
    """
    availability: Dict[int, Dict[int, HoldingAvailability]] = {}
    for bib_id in bib_ids:
        availability[bib_id] = get_bib_availability(conn, bib_id, locations, full=full)
        if full:
            return availability[bib_id]
    if full:
        return {}
    return availability


def format_enum(item: Item) -> Optional[str]:
    """'ENUM (CHRON)', 'ENUM', or None without an enumeration."""
    if item.enum is None:
        return None
    if item.chron is not None:
        return f"{item.enum} ({item.chron})"
    return item.enum


def get_full_mfhd_availability(
    conn: Connection,
    mfhd_id: int,
    locations: HoldingLocationLookup,
) -> List[ItemAvailability]:
    """Status, reserve location and enumeration for every circulating item of a holding."""
    item_availability: List[ItemAvailability] = []
    for item in get_items_for_holding(conn, mfhd_id):
        values = {"id": item.id, "barcode": item.barcode, "enum": format_enum(item)}
        if item.on_reserve:
            values.update(
                on_reserve=reserve_location(item),
                copy_number=item.copy_number,
                status=item.status,
            )
        else:
            values["status"] = LIMITED if is_limited_access(item.perm_location, locations) else item.status
            # Copy 1 is the implicit default
            if item.copy_number != 1:
                values["copy_number"] = item.copy_number
        item_availability.append(ItemAvailability(**values))
    return item_availability
