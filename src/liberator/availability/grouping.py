"""Bib-level item aggregation, grouped by permanent location."""

from typing import Dict, List, Tuple

from sqlalchemy.engine import Connection

from liberator.availability.models import HoldingItems
from liberator.circulation.items import get_items_for_holding
from liberator.circulation.orders import get_orders
from liberator.holdings.records import get_holding_records
from liberator.marc.record import Record

ORDER_GROUP = "order"


def holdings_notes(holding: Record) -> List[str]:
    """Textual holdings ($a) and public notes ($z) from every 866."""
    notes: List[str] = []
    for f866 in holding.get_fields("866"):
        text_holdings = f866.first_subfield("a")
        public_note = f866.first_subfield("z")
        if text_holdings is not None:
            notes.append(text_holdings)
        if public_note is not None:
            notes.append(public_note)
    return notes


def group_items(entries: List[Tuple[str, HoldingItems]]) -> Dict[str, List[HoldingItems]]:
    """Group (location, holding items) pairs by location, keeping first-seen order."""
    grouped: Dict[str, List[HoldingItems]] = {}
    for location, holding_items in entries:
        grouped.setdefault(location, []).append(holding_items)
    return grouped


def get_items_for_bib(conn: Connection, bib_id: int) -> Dict[str, List[HoldingItems]]:
    """
    Items of every non-suppressed holding of a bib, grouped by location code.

    Holdings without items are left out. When no holding has items the bib's
    order lines are returned under the "order" key instead.

    Returns:
        Dict of perm location code -> list of HoldingItems; empty when the bib
        has neither items nor orders
    """
    entries: List[Tuple[str, HoldingItems]] = []
    for holding in get_holding_records(conn, bib_id):
        if holding.control_number is None:
            continue
        mfhd_id = int(holding.control_number)
        items = get_items_for_holding(conn, mfhd_id)
        if not items:
            continue
        notes = holdings_notes(holding)
        entries.append(
            (
                holding.location or "",
                HoldingItems(
                    holding_id=mfhd_id,
                    call_number=holding.call_number,
                    notes=notes or None,
                    items=items,
                ),
            )
        )

    if not entries:
        orders = get_orders(conn, bib_id)
        if orders:
            entries.append((ORDER_GROUP, HoldingItems(items=orders)))
    return group_items(entries)
