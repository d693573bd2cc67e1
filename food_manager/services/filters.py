"""
Item Filter/Search

Pure functions over an item list. The result is always a subsequence of the
input in its original order; filtering never sorts or paginates.
"""

from typing import Iterable

from food_manager.schemas import (
    AvailabilityFilterEnum,
    FoodItem,
    ItemFilter,
    VegFilterEnum,
)


def matches(item: FoodItem, criteria: ItemFilter) -> bool:
    """True if the item satisfies every active predicate."""
    query = criteria.query.lower()
    if query and query not in item.name.lower() and query not in item.description.lower():
        return False

    if criteria.veg_filter == VegFilterEnum.VEG and not item.is_veg:
        return False
    if criteria.veg_filter == VegFilterEnum.NONVEG and item.is_veg:
        return False

    if criteria.availability_filter == AvailabilityFilterEnum.AVAILABLE and not item.is_available:
        return False

    return True


def apply_filters(items: Iterable[FoodItem], criteria: ItemFilter) -> list[FoodItem]:
    """
    Filter items by search text, veg classification and availability.

    Example:
        >>> apply_filters(items, ItemFilter(query="dal", veg_filter="veg"))
    """
    return [item for item in items if matches(item, criteria)]
