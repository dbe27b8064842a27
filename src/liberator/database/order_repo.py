"""Repository for acquisitions order rows."""

from typing import List

from sqlalchemy.engine import Connection, RowMapping

from liberator.database import queries


def get_order_rows(conn: Connection, bib_id: int) -> List[RowMapping]:
    """Order lines for a bib, most recent status date first."""
    return list(conn.execute(queries.ORDERS, {"bib_id": bib_id}).mappings())
