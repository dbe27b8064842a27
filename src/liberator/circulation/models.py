"""Pydantic models for circulation data read from Voyager."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """A single copy attached to a holding.

    Brief lookups fill only id, status, on_reserve, temp_location and
    perm_location; the remaining fields stay None.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    status: Optional[str] = None  # item_status_type description, e.g. "Not Charged"
    on_reserve: bool = False
    temp_location: Optional[str] = None  # location code
    perm_location: Optional[str] = None  # location code
    enum: Optional[str] = None
    chron: Optional[str] = None
    copy_number: Optional[int] = None
    item_sequence_number: Optional[int] = None
    status_date: Optional[datetime] = None
    barcode: Optional[str] = None
    create_date: Optional[datetime] = None


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    bib_id: int
    po_status: Optional[int] = None  # purchase order status code
    li_status: Optional[int] = None  # line item copy status code
    date: Optional[datetime] = None


class HoldingLocation(BaseModel):
    """Public metadata for a location code, kept outside Voyager."""
    model_config = ConfigDict(frozen=True)

    code: str
    label: str = ""
    always_requestable: bool = False


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    code: str
    display_name: Optional[str] = None
    suppress: bool = False
    always_requestable: bool = False
    label: Optional[str] = None


class PatronInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    netid: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    barcode: Optional[str] = None
    barcode_status: Optional[int] = None
    barcode_status_date: Optional[datetime] = None
    university_id: Optional[str] = None
    patron_group: str | int | None = Field(default=None, description="'staff' for group 3, else the group id")
    purge_date: Optional[datetime] = None
    expire_date: Optional[datetime] = None
    patron_id: Optional[int] = None
