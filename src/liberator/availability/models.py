from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..circulation.models import Item, Order


class HoldingAvailability(BaseModel):
    """Availability verdict for one holding record."""
    model_config = ConfigDict(frozen=True)

    status: str  # Voyager item status, order status, Online, Limited or On Shelf
    location: Optional[str] = None  # holding location code (852 $b)
    more_items: bool = False  # more than one circulating item on the holding
    on_reserve: Optional[str] = None  # reserve location code when the first item is on reserve


class ItemAvailability(BaseModel):
    """One row of the full per-holding item listing."""
    model_config = ConfigDict(frozen=True)

    id: int
    barcode: Optional[str] = None
    status: Optional[str] = None
    on_reserve: Optional[str] = None
    copy_number: Optional[int] = None
    enum: Optional[str] = None


class HoldingItems(BaseModel):
    """Items of one holding inside a location group (or the synthetic order group)."""
    model_config = ConfigDict(frozen=True)

    holding_id: Optional[int] = None
    call_number: Optional[str] = None
    notes: Optional[List[str]] = None
    items: List[Union[Item, Order]] = []
