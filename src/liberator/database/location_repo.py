"""Repository for Voyager location rows."""

from typing import List

from sqlalchemy.engine import Connection, RowMapping

from liberator.database import queries


def get_location_rows(conn: Connection) -> List[RowMapping]:
    return list(conn.execute(queries.ALL_LOCATIONS).mappings())
