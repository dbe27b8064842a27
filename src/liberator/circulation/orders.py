"""Order status resolver: acquisitions state as a public on-order label."""

from typing import List, Optional

from sqlalchemy.engine import Connection

from liberator.circulation.models import Order
from liberator.database.order_repo import get_order_rows

# Purchase order status codes
PO_PENDING = 0
PO_APPROVED = 1
PO_RECEIVED_PARTIAL = 3
PO_RECEIVED_COMPLETE = 4
PO_STATUS_WHITELIST = (PO_PENDING, PO_APPROVED, PO_RECEIVED_PARTIAL, PO_RECEIVED_COMPLETE)

# Line item copy status codes
LI_PENDING = 0
LI_RECEIVED_COMPLETE = 1
LI_APPROVED = 8
LI_RECEIVED_PARTIAL = 9
LI_STATUS_WHITELIST = (LI_PENDING, LI_RECEIVED_COMPLETE, LI_APPROVED, LI_RECEIVED_PARTIAL)

ORDER_RECEIVED = "Order Received"
PENDING_ORDER = "Pending Order"
ON_ORDER = "On-Order"


def get_orders(conn: Connection, bib_id: int) -> List[Order]:
    """All order lines for a bib, most recent first."""
    return [
        Order(
            bib_id=row["bib_id"],
            po_status=row["po_status"],
            li_status=row["line_item_status"],
            date=row["status_date"],
        )
        for row in get_order_rows(conn, bib_id)
    ]


def order_status_label(order: Order) -> Optional[str]:
    """
    Label for one order line, or None if neither status code is whitelisted.

    Examples:
        li_status=1, date 2020-05-01 -> "Order Received 05-01-2020"
        li_status=0, no date -> "Pending Order"
    """
    if order.po_status not in PO_STATUS_WHITELIST and order.li_status not in LI_STATUS_WHITELIST:
        return None
    if order.li_status == LI_RECEIVED_COMPLETE:
        status = ORDER_RECEIVED
    elif order.li_status == LI_PENDING:
        status = PENDING_ORDER
    else:
        status = ON_ORDER
    if order.date is not None:
        status = f"{status} {order.date.strftime('%m-%d-%Y')}"
    return status


def get_order_status(conn: Connection, bib_id: int) -> Optional[str]:
    """On-order status of the bib's most recent order line, or None."""
    orders = get_orders(conn, bib_id)
    if not orders:
        return None
    return order_status_label(orders[0])
