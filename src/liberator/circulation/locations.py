"""Location metadata and the limited-access classifier."""

from pathlib import Path
from typing import Dict, Iterable, Optional

from sqlalchemy.engine import Connection

from liberator.circulation.models import HoldingLocation, Location
from liberator.config.loader import load_holding_locations_config
from liberator.database.location_repo import get_location_rows

REFERENCE_LABEL = "Reference"


class HoldingLocationLookup:
    """Read-only code -> HoldingLocation index, shared across requests."""

    def __init__(self, locations: Iterable[HoldingLocation] = ()):
        self._by_code: Dict[str, HoldingLocation] = {loc.code: loc for loc in locations}

    @classmethod
    def from_config(cls, path: Path | None = None) -> "HoldingLocationLookup":
        return cls(HoldingLocation(**entry) for entry in load_holding_locations_config(path))

    def find_by_code(self, code: Optional[str]) -> Optional[HoldingLocation]:
        if code is None:
            return None
        return self._by_code.get(code)

    def __len__(self) -> int:
        return len(self._by_code)


def is_limited_access(location_code: Optional[str], locations: HoldingLocationLookup) -> bool:
    """
    Whether a location requires mediated access.

    Assume full access unless the location is always requestable or its label
    marks it as a reference location. Unknown codes are never limited.
    """
    holding_location = locations.find_by_code(location_code)
    if holding_location is None:
        return False
    return holding_location.always_requestable or REFERENCE_LABEL in holding_location.label


def get_locations(
    conn: Connection,
    locations: Optional[HoldingLocationLookup] = None,
) -> Dict[int, Location]:
    """
    All Voyager locations keyed by location id.

    Args:
        conn: Source database connection
        locations: Optional holding-location metadata to fill label and
            always_requestable

    Returns:
        Dict of location id -> Location
    """
    result: Dict[int, Location] = {}
    for row in get_location_rows(conn):
        holding_location = locations.find_by_code(row["location_code"]) if locations else None
        result[row["location_id"]] = Location(
            id=row["location_id"],
            code=row["location_code"],
            display_name=row["location_display_name"],
            suppress=row["suppress_in_opac"] == "Y",
            always_requestable=holding_location.always_requestable if holding_location else False,
            label=holding_location.label if holding_location else None,
        )
    return result
