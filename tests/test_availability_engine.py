"""Tests for the availability decision engine."""

from datetime import datetime

from liberator.availability.engine import (
    LIMITED,
    ONLINE,
    ON_SHELF,
    format_enum,
    get_availability,
    get_bib_availability,
    reserve_location,
)
from liberator.availability.models import HoldingAvailability
from liberator.circulation.models import Item


def test_top_item_status_decides(conn, voyager, locations):
    """The item with the highest sequence number decides the holding status."""
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.item(101, 11, "f", status=1, sequence=1)
    voyager.item(102, 11, "f", status=2, sequence=3)
    voyager.item(103, 11, "f", status=1, sequence=2)

    availability = get_availability(conn, [1], locations)

    assert availability == {
        1: {11: HoldingAvailability(status="Charged", location="f", more_items=True)}
    }


def test_single_item_has_no_more_items(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.item(101, 11, "f")

    entry = get_bib_availability(conn, 1, locations)[11]

    assert entry.status == "Not Charged"
    assert entry.more_items is False
    assert entry.on_reserve is None


def test_excluded_items_do_not_count(conn, voyager, locations):
    """A withdrawn top item is skipped; with nothing left the holding falls back."""
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.item(101, 11, "f", status=20, sequence=5)
    voyager.item(102, 11, "f", status=22, sequence=1)
    voyager.holding(12, 1, "anxb")
    voyager.item(103, 12, "anxb", status=20, extra_statuses=[16])

    availability = get_bib_availability(conn, 1, locations)

    assert availability[11].status == "In Process"
    assert availability[11].more_items is False
    assert availability[12].status == ON_SHELF


def test_item_with_an_excluded_status_row_still_circulates(conn, voyager, locations):
    """Only the excluded status rows are dropped; the item keeps its other status."""
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.item(101, 11, "f", status=1, sequence=2, extra_statuses=[16])
    voyager.item(102, 11, "f", status=2, sequence=1)

    entry = get_bib_availability(conn, 1, locations)[11]

    assert entry.status == "Not Charged"
    assert entry.more_items is True


def test_limited_access_item_location(conn, voyager, locations):
    """Item perm location decides limited access, not the holding location."""
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.item(101, 11, "sa", status=2)
    voyager.holding(12, 1, "sa")
    voyager.item(102, 12, "f", status=2)

    availability = get_bib_availability(conn, 1, locations)

    assert availability[11].status == LIMITED
    assert availability[11].location == "f"
    assert availability[12].status == "Charged"


def test_reference_label_is_limited(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "sv")
    voyager.item(101, 11, "sv")
    voyager.holding(12, 1, "svref")
    voyager.item(102, 12, "svref")

    availability = get_bib_availability(conn, 1, locations)

    assert availability[11].status == LIMITED
    # "reference" in lower case does not match
    assert availability[12].status == "Not Charged"


def test_on_reserve_prefers_temp_location(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.item(101, 11, "f", on_reserve="Y", temp_location="anxb")
    voyager.holding(12, 1, "anxb")
    voyager.item(102, 12, "anxb", on_reserve="Y")

    availability = get_bib_availability(conn, 1, locations)

    assert availability[11].on_reserve == "anxb"
    assert availability[12].on_reserve == "anxb"
    assert availability[12].status == "Not Charged"


def test_order_status_without_items(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.order(1, po_status=1, li_status=1, status_date=datetime(2020, 5, 1))

    entry = get_bib_availability(conn, 1, locations)[11]

    assert entry.status == "Order Received 05-01-2020"
    assert entry.location == "f"
    assert entry.more_items is False


def test_order_status_applies_to_every_holding_without_items(conn, voyager, locations):
    """Order precedence beats the electronic and limited-access fallbacks."""
    voyager.bib(1)
    voyager.holding(11, 1, "elf1")
    voyager.holding(12, 1, "sa")
    voyager.order(1, po_status=0, li_status=0, mfhd_id=11)

    availability = get_bib_availability(conn, 1, locations)

    assert availability[11].status == "Pending Order"
    assert availability[12].status == "Pending Order"


def test_order_does_not_override_items(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.item(101, 11, "f", status=2)
    voyager.order(1, po_status=1, li_status=8)

    assert get_bib_availability(conn, 1, locations)[11].status == "Charged"


def test_fallbacks_without_items_or_orders(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "elf1")
    voyager.holding(12, 1, "sa")
    voyager.bib(2)
    voyager.holding(21, 2, "f")
    voyager.holding(22, 2, "zzz")

    availability = get_availability(conn, [1, 2], locations)

    assert availability[1][11].status == ONLINE
    assert availability[1][12].status == LIMITED
    assert availability[2][21].status == ON_SHELF
    # Unknown location codes are never limited
    assert availability[2][22].status == ON_SHELF


def test_non_whitelisted_order_is_ignored(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.order(1, po_status=5, li_status=6)

    assert get_bib_availability(conn, 1, locations)[11].status == ON_SHELF


def test_brief_availability_covers_first_two_holdings(conn, voyager, locations):
    voyager.bib(1)
    for mfhd_id in (11, 12, 13):
        voyager.holding(mfhd_id, 1, "f")

    brief = get_availability(conn, [1], locations)
    full = get_availability(conn, [1], locations, full=True)

    assert list(brief[1]) == [11, 12]
    assert list(full) == [11, 12, 13]


def test_full_availability_uses_first_bib_only(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "f")
    voyager.bib(2)
    voyager.holding(21, 2, "f")

    assert list(get_availability(conn, [2, 1], locations, full=True)) == [21]
    assert get_availability(conn, [], locations, full=True) == {}


def test_bib_without_visible_holdings(conn, voyager, locations):
    """Bibs with no holdings map to an empty dict; missing bibs look the same."""
    voyager.bib(1)
    voyager.holding(11, 1, "f", suppress="Y")

    assert get_availability(conn, [1, 404], locations) == {1: {}, 404: {}}


def test_suppressed_holdings_are_not_counted_toward_the_limit(conn, voyager, locations):
    voyager.bib(1)
    voyager.holding(11, 1, "f", suppress="Y")
    voyager.holding(12, 1, "f")
    voyager.holding(13, 1, "anxb")

    assert list(get_availability(conn, [1], locations)[1]) == [12, 13]


def test_reserve_location():
    assert reserve_location(Item(id=1, on_reserve=False, temp_location="x")) is None
    assert reserve_location(Item(id=1, on_reserve=True, perm_location="f")) == "f"
    assert reserve_location(Item(id=1, on_reserve=True, temp_location="x", perm_location="f")) == "x"


def test_format_enum():
    assert format_enum(Item(id=1)) is None
    assert format_enum(Item(id=1, enum="v.2")) == "v.2"
    assert format_enum(Item(id=1, enum="v.2", chron="1999")) == "v.2 (1999)"
    assert format_enum(Item(id=1, chron="1999")) is None
