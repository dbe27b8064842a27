from contextlib import contextmanager
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine


def get_engine(database_url: str, echo: bool = False) -> Engine:
    return create_engine(database_url, future=True, echo=echo)


def engine_from_config(config: Dict[str, Any]) -> Engine:
    """Build an engine from the 'database' section of the runtime config."""
    database = config["database"]
    return get_engine(database["url"], echo=bool(database.get("echo", False)))


@contextmanager
def connection_context(engine: Engine) -> Generator[Connection, None, None]:
    """
    Context manager for one unit of work against the source database.

    Every read of a logical operation shares the yielded connection, and the
    connection is released on exit even when a query fails.

    Usage:
        with connection_context(engine) as conn:
            get_availability(conn, [bib_id], locations)
    """
    conn = engine.connect()
    try:
        yield conn
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
