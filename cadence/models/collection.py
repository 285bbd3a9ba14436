"""Collectibles models for cadence."""

from datetime import date
from typing import Dict, Optional

from pydantic import BaseModel, Field


class CollectibleItem(BaseModel):
    """One owned collectible."""

    id: str
    name: str
    category: str
    series: Optional[str] = Field(None, description="Name of the set/series the item belongs to")
    quantity: int = Field(1, ge=1)
    purchase_price: Optional[float] = Field(None, ge=0)
    current_value: Optional[float] = Field(None, ge=0)
    date_added: Optional[date] = None


class CollectionSet(BaseModel):
    """A set the user is trying to complete."""

    id: str
    name: str
    category: str
    total_items: int = Field(1, ge=0)


class CollectionStatistics(BaseModel):
    total_items: int = 0
    total_value: float = 0.0
    total_purchase_price: float = 0.0
    profit_loss: float = 0.0
    average_value: float = 0.0
    duplicates_count: int = 0
    category_counts: Dict[str, int] = Field(default_factory=dict)


class SetProgress(BaseModel):
    set_id: str
    completed_items: int
    total_items: int
    completion_percentage: float
