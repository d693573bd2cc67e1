"""
Application Coordinator

Top-level object the presentation layer drives. It owns the HTTP client,
the session context, the item cache and the notification center, and it is
the only place errors are caught: services raise, the coordinator logs the
failure, shows an error notification and returns a falsy result.

An expired session is not handled by reloading anything. The session is
already invalidated by the time AuthExpired arrives; the coordinator flags
``login_required`` and the caller decides where to send the user.

Usage:
    async with FoodManagerApp() as app:
        if await app.refresh_items():
            for item in app.visible_items(ItemFilter(query="paneer")):
                print(item.name)
"""

import logging
from typing import Any, Awaitable, Optional, TypeVar

import httpx
from pydantic import ValidationError

from food_manager.core.config import Settings, get_settings
from food_manager.errors import AuthExpired, FoodManagerError
from food_manager.schemas import FoodItem, ItemFilter, Session, Transaction
from food_manager.services.auth import AuthService
from food_manager.services.filters import apply_filters
from food_manager.services.http import AuthenticatedClient
from food_manager.services.items import ItemCache, ItemSyncService
from food_manager.services.mapping import item_from_server
from food_manager.services.notifications import NotificationCenter
from food_manager.services.ordering import BaseOrderService, OrderReceipt, get_order_service
from food_manager.services.session import BaseSessionStore, SessionContext, get_session_store
from food_manager.services.transactions import TransactionService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FoodManagerApp:
    """
    Wires the services together around one explicit session context.

    Attributes:
        settings: Client settings
        session: Session context shared by every request-issuing service
        cache: In-memory item list the views read from
        notifications: Transient messages for the user
        login_required: Set when the server ended the session
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        session_store: Optional[BaseSessionStore] = None,
        order_service: Optional[BaseOrderService] = None,
    ):
        self.settings = settings or get_settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self.settings.request_timeout)

        self.session = SessionContext(session_store or get_session_store())
        self.cache = ItemCache()
        self.notifications = NotificationCenter(ttl_seconds=self.settings.notification_ttl_seconds)
        self.login_required = False

        self.items = ItemSyncService(self._client, self.settings)
        self.auth = AuthService(self._client, self.session, self.settings)
        self.transactions = TransactionService(
            AuthenticatedClient(self.session, self._client, self.settings.auth_scheme),
            self.settings,
        )
        self.orders = order_service or get_order_service()

    async def __aenter__(self) -> "FoodManagerApp":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # =========================================================================
    # ERROR HANDLING
    # =========================================================================

    def report_error(self, error: Exception, action: str) -> None:
        """Log a failure and surface it as an error notification."""
        if isinstance(error, AuthExpired):
            self.login_required = True
            logger.warning(f"{action}: session expired")
        elif isinstance(error, ValidationError):
            logger.warning(f"{action}: invalid input: {error}")
        else:
            logger.error(f"{action} failed: {error}")

        if isinstance(error, ValidationError):
            message = error.errors()[0]["msg"]
        else:
            message = str(error)
        self.notifications.error(f"Error: {message}")

    async def _run(self, action: str, operation: Awaitable[T]) -> Optional[T]:
        try:
            return await operation
        except (FoodManagerError, ValidationError) as e:
            self.report_error(e, action)
            return None

    # =========================================================================
    # SESSION
    # =========================================================================

    @property
    def current_session(self) -> Optional[Session]:
        return self.session.read()

    async def login(self, email: str, password: str) -> Optional[Session]:
        session = await self._run("Login", self.auth.login(email, password))
        if session is not None:
            self.login_required = False
            self.notifications.success(f"Welcome, {session.user.display_name}!")
        return session

    def logout(self) -> None:
        self.auth.logout()
        self.notifications.success("Logged out")

    # =========================================================================
    # ITEMS
    # =========================================================================

    async def refresh_items(self) -> bool:
        """
        Reload the item cache from the server.

        Returns:
            True on success. On failure the previous cache is kept and an
            error notification is shown; call again to retry.
        """
        items = await self._run("Fetching food items", self.items.fetch_all())
        if items is None:
            return False
        self.cache.replace_all(items)
        return True

    def visible_items(self, criteria: Optional[ItemFilter] = None) -> list[FoodItem]:
        return apply_filters(self.cache.items, criteria or ItemFilter())

    def available_today(self) -> list[FoodItem]:
        return self.cache.available()

    def get_item(self, item_id: int) -> Optional[FoodItem]:
        item = self.cache.get(item_id)
        if item is None:
            self.notifications.error(f"Error: No food item with id {item_id}")
        return item

    def ingredients_for(self, item_id: int) -> Optional[str]:
        item = self.get_item(item_id)
        if item is None:
            return None
        return item.ingredients or "No ingredients listed"

    async def add_item(self, item: FoodItem) -> bool:
        payload = await self._run("Adding food item", self.items.create(item))
        if payload is None:
            return False

        # Only cache what the server echoed back with an id of its own
        if isinstance(payload, dict) and payload.get("id") is not None:
            try:
                self.cache.add(item_from_server(payload))
            except ValidationError as e:
                logger.debug(f"Created item not cached, response unreadable: {e}")

        self.notifications.success("Food item added successfully!")
        return True

    async def save_item(self, item: FoodItem) -> bool:
        """
        Push an edit and, once accepted, replace the cached entry.

        Whichever save resolves last wins; there is no conflict detection.
        """
        payload = await self._run("Updating food item", self.items.update(item))
        if payload is None:
            return False
        self.cache.apply_update(item)
        self.notifications.success("Food item updated successfully!")
        return True

    # =========================================================================
    # ORDERS & TRANSACTIONS
    # =========================================================================

    async def place_order(self, item_id: int, unit_name: Optional[str] = None) -> Optional[OrderReceipt]:
        item = self.get_item(item_id)
        if item is None:
            return None
        receipt = await self._run("Placing order", self.orders.place_order(item, unit_name))
        if receipt is not None:
            self.notifications.success(f"Order placed successfully! Token: {receipt.token}")
        return receipt

    async def load_transactions(self) -> Optional[list[Transaction]]:
        return await self._run("Fetching transactions", self.transactions.fetch_all())
