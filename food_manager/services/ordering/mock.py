"""
Mock Ordering Service

Simulates order placement without any API call. The order token is built
from the current time and a random number, e.g. ORD-1718000000000-4821.
"""

import logging
import random
import time
from datetime import datetime
from typing import Callable, Optional

from food_manager.errors import ClientValidationError
from food_manager.schemas import FoodItem
from food_manager.services.ordering.base import BaseOrderService, OrderReceipt

logger = logging.getLogger(__name__)


class MockOrderService(BaseOrderService):
    """
    Local order placement for the "available today" flow.

    Attributes:
        clock: Returns the current time in seconds (injectable for tests)
        rng: Random source for the token suffix
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        self.clock = clock
        self.rng = rng or random.Random()

    @property
    def provider_name(self) -> str:
        return "mock"

    def _generate_token(self) -> str:
        millis = int(self.clock() * 1000)
        return f"ORD-{millis}-{self.rng.randint(0, 9999)}"

    async def place_order(self, item: FoodItem, unit_name: Optional[str] = None) -> OrderReceipt:
        if not item.is_available:
            raise ClientValidationError(f"{item.name} is not available today")

        unit_name = unit_name or item.default_unit.name
        price = item.price_for(unit_name)
        if price is None:
            raise ClientValidationError(f"{item.name} has no unit named '{unit_name}'")

        receipt = OrderReceipt(
            token=self._generate_token(),
            item_id=item.id,
            item_name=item.name,
            unit=unit_name,
            price=price,
            placed_at=datetime.fromtimestamp(self.clock()),
        )
        logger.info(f"Mock: Order placed - {receipt.token} - {item.name} ({unit_name}) {price:.2f}")
        return receipt
