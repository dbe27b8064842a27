"""Liberator facade: every operation in one place, one connection per call."""

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Optional, Union

from ..availability.engine import get_availability, get_full_mfhd_availability
from ..availability.grouping import get_items_for_bib
from ..availability.models import HoldingItems, ItemAvailability
from ..circulation.items import get_current_issues, get_info_for_item, get_item_statuses, get_items_for_holding
from ..circulation.locations import HoldingLocationLookup, get_locations
from ..circulation.models import Item, Location, PatronInfo
from ..circulation.orders import get_order_status
from ..circulation.patrons import get_patron_info
from ..config.loader import load_config
from ..database.client import connection_context, engine_from_config
from ..holdings.records import get_bib_record, get_holding_record, get_holding_records
from ..marc.record import Record

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class Liberator:
    """
    Read API over a Voyager database.

    Each method takes an optional open connection. Without one, the method
    opens a connection for its whole unit of work and closes it on return.
    """

    def __init__(self, engine: "Engine", locations: Optional[HoldingLocationLookup] = None):
        self.engine = engine
        self.locations = locations if locations is not None else HoldingLocationLookup()

    @classmethod
    def from_config(cls, path: Path | None = None, config: Optional[Dict[str, Any]] = None) -> "Liberator":
        """Build from liberator.config.yaml (or an already loaded config dict)."""
        if config is None:
            config = load_config(path)
        locations = HoldingLocationLookup.from_config(Path(config["holding_locations"]))
        return cls(engine_from_config(config), locations)

    @contextmanager
    def connection(self, conn: Optional["Connection"] = None) -> Iterator["Connection"]:
        if conn is not None:
            yield conn
            return
        with connection_context(self.engine) as c:
            yield c

    def get_bib_record(
        self,
        bib_id: int,
        conn: Optional["Connection"] = None,
        holdings: bool = True,
        holdings_in_bib: bool = True,
    ) -> Union[Record, List[Record], None]:
        with self.connection(conn) as c:
            return get_bib_record(c, bib_id, holdings=holdings, holdings_in_bib=holdings_in_bib)

    def get_holding_record(self, mfhd_id: int, conn: Optional["Connection"] = None) -> Optional[Record]:
        with self.connection(conn) as c:
            return get_holding_record(c, mfhd_id)

    def get_holding_records(self, bib_id: int, conn: Optional["Connection"] = None) -> List[Record]:
        with self.connection(conn) as c:
            return get_holding_records(c, bib_id)

    def get_availability(
        self,
        bib_ids: Iterable[int],
        full: bool = False,
        conn: Optional["Connection"] = None,
    ) -> Dict[int, Any]:
        """See availability.engine.get_availability for the result shapes."""
        with self.connection(conn) as c:
            return get_availability(c, bib_ids, self.locations, full=full)

    def get_full_mfhd_availability(
        self, mfhd_id: int, conn: Optional["Connection"] = None
    ) -> List[ItemAvailability]:
        with self.connection(conn) as c:
            return get_full_mfhd_availability(c, mfhd_id, self.locations)

    def get_items_for_bib(self, bib_id: int, conn: Optional["Connection"] = None) -> Dict[str, List[HoldingItems]]:
        with self.connection(conn) as c:
            return get_items_for_bib(c, bib_id)

    def get_items_for_holding(self, mfhd_id: int, conn: Optional["Connection"] = None) -> List[Item]:
        with self.connection(conn) as c:
            return get_items_for_holding(c, mfhd_id)

    def get_item(self, item_id: int, conn: Optional["Connection"] = None) -> Optional[Item]:
        with self.connection(conn) as c:
            return get_info_for_item(c, item_id)

    def get_current_issues(self, mfhd_id: int, conn: Optional["Connection"] = None) -> Optional[List[str]]:
        with self.connection(conn) as c:
            return get_current_issues(c, mfhd_id)

    def get_order_status(self, bib_id: int, conn: Optional["Connection"] = None) -> Optional[str]:
        with self.connection(conn) as c:
            return get_order_status(c, bib_id)

    def get_item_statuses(self, conn: Optional["Connection"] = None) -> Dict[int, str]:
        with self.connection(conn) as c:
            return get_item_statuses(c)

    def get_locations(self, conn: Optional["Connection"] = None) -> Dict[int, Location]:
        with self.connection(conn) as c:
            return get_locations(c, self.locations)

    def get_patron_info(self, patron_id: str, conn: Optional["Connection"] = None) -> Optional[PatronInfo]:
        with self.connection(conn) as c:
            return get_patron_info(c, patron_id)


__all__ = ["Liberator"]
