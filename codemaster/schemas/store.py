"""Store schemas"""

from pydantic import Field
from typing import Optional, List
from datetime import datetime

from codemaster.schemas.response import CamelModel


class StoreItemResponse(CamelModel):
    """Catalog item"""
    id: int
    name: str
    description: str
    price: int
    type: str
    image: str


class PurchaseRequest(CamelModel):
    """Buy request"""
    item_id: int = Field(..., ge=1)


class InventoryEntryResponse(CamelModel):
    """Owned item"""
    id: int
    item_id: int
    item: Optional[StoreItemResponse] = None
    price_paid: int
    purchase_date: datetime


class PurchaseResponse(CamelModel):
    """Result of a successful purchase"""
    points: int
    inventory: List[InventoryEntryResponse]
    message: str


class SeedResponse(CamelModel):
    """Catalog reseed result"""
    message: str
    created: int = 0
    updated: int = 0
    removed: int = 0
