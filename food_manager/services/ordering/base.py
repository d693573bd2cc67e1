"""
Ordering Service Abstract Base Class

Defines the contract for placing an order for one unit of a menu item from
the "available today" view. The only implementation today is the mock,
which hands out a local order token; a real implementation would post the
order to the API and return the same receipt shape.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from food_manager.schemas import FoodItem


@dataclass
class OrderReceipt:
    """
    Standardized result of placing an order.

    Attributes:
        token: Order token the customer keeps for tracking (ORD-<ms>-<n>)
        item_id: Ordered item
        item_name: Name shown on the receipt
        unit: Selected unit name
        price: Price of the selected unit
        placed_at: Local time the order was placed
    """
    token: str
    item_id: Optional[int]
    item_name: str
    unit: str
    price: float
    placed_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "token": self.token,
            "item_id": self.item_id,
            "item_name": self.item_name,
            "unit": self.unit,
            "price": self.price,
            "placed_at": self.placed_at.isoformat(),
        }


class BaseOrderService(ABC):
    """Abstract base class for ordering services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g. "mock")."""
        pass

    @abstractmethod
    async def place_order(self, item: FoodItem, unit_name: Optional[str] = None) -> OrderReceipt:
        """
        Place an order for one unit of an item.

        Args:
            item: The item being ordered; must be available today
            unit_name: Unit to order; defaults to the item's first unit

        Returns:
            OrderReceipt: Token and price of the order

        Raises:
            ClientValidationError: If the item is unavailable or has no such unit
        """
        pass
