"""
                        Services Module

Everything that talks to the API or holds client state.

Services:
    - session: token/user storage and the explicit SessionContext
    - http: request helpers and the authenticated wrapper
    - items: item synchronization and the in-memory item cache
    - filters: search/veg/availability filtering
    - auth: login and logout
    - transactions: transaction history
    - ordering: mock order placement
    - notifications: transient user messages
"""

from food_manager.services.filters import apply_filters
from food_manager.services.items import ItemCache, ItemSyncService

__all__ = ["ItemSyncService", "ItemCache", "apply_filters"]
