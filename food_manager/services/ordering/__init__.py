"""
Ordering Service Factory

Usage:
    from food_manager.services.ordering import get_order_service

    receipt = await get_order_service().place_order(item, "Half Plate")
    print(receipt.token)
"""

import logging
from functools import lru_cache

from food_manager.services.ordering.base import BaseOrderService, OrderReceipt
from food_manager.services.ordering.mock import MockOrderService

logger = logging.getLogger(__name__)


@lru_cache()
def get_order_service() -> BaseOrderService:
    """
    Get the ordering service instance.

    The API exposes no order endpoint, so this is always the mock.
    """
    logger.debug("Order Service: Using MockOrderService")
    return MockOrderService()


def reset_order_service() -> None:
    """Clear the cached order service instance."""
    get_order_service.cache_clear()


__all__ = [
    "get_order_service",
    "reset_order_service",
    "BaseOrderService",
    "OrderReceipt",
    "MockOrderService",
]
