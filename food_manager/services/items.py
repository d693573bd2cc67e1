"""
Item Synchronization Service

Pulls the item collection from the API, pushes creates and edits back, and
keeps the in-memory cache the views read from.

Rules:
    - fetch replaces the cache wholesale, never merges
    - an edit patches the cached entry only after the server accepted it;
      the last acknowledged write wins, with no conflict detection
    - nothing is retried automatically; the user retries by fetching again
    - ids are only ever assigned by the server
"""

import logging
from typing import Any, Iterable, Optional

import httpx
from pydantic import ValidationError

from food_manager.core.config import Settings, get_settings
from food_manager.errors import (
    ClientValidationError,
    CreateError,
    FetchError,
    UpdateError,
)
from food_manager.schemas import FoodItem
from food_manager.services.http import (
    extract_error_message,
    read_error_payload,
    read_json,
    send_request,
)
from food_manager.services.mapping import item_from_server, item_to_form

logger = logging.getLogger(__name__)


class ItemSyncService:
    """
    Remote operations on the food item collection.

    The item endpoints are public; requests go out without a token.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Optional[Settings] = None):
        self._client = client
        self._settings = settings or get_settings()

    async def fetch_all(self) -> list[FoodItem]:
        """
        Fetch every item, in server order.

        Raises:
            NonJsonResponseError: If the body is not JSON
            FetchError: If the status is not OK, the body is not a list or a
                record cannot be read
            NetworkError: If the request never completed
        """
        url = self._settings.items_url
        response = await send_request(self._client, "GET", url)
        data = read_json(response)

        if not response.is_success:
            message = data.get("message") if isinstance(data, dict) else None
            raise FetchError(
                message or "Failed to fetch food items",
                status_code=response.status_code,
                payload=data,
            )

        if not isinstance(data, list):
            raise FetchError(
                "Unexpected response: expected a list of items",
                status_code=response.status_code,
                payload=data,
            )

        if not all(isinstance(record, dict) for record in data):
            raise FetchError(
                "Unexpected response: malformed food item record",
                status_code=response.status_code,
                payload=data,
            )

        try:
            items = [item_from_server(record) for record in data]
        except ValidationError as e:
            logger.error(f"Malformed food item record: {e}")
            raise FetchError(
                "Unexpected response: malformed food item record",
                status_code=response.status_code,
                payload=data,
            ) from e

        logger.info(f"Fetched {len(items)} food items")
        return items

    async def create(self, item: FoodItem) -> Any:
        """
        Create a new item.

        Returns:
            The decoded response body (normally the created record)

        Raises:
            ClientValidationError: If required fields are blank
            CreateError: With the server's message on a non-OK status
            NetworkError: If the request never completed
        """
        self._validate(item)
        data, files = item_to_form(item)

        response = await send_request(
            self._client,
            "POST",
            self._settings.items_url,
            data=data,
            files=files or None,
        )
        payload = read_error_payload(response)

        if not response.is_success:
            message = extract_error_message(payload, "Failed to add food item")
            logger.warning(f"Create rejected ({response.status_code}): {message}")
            raise CreateError(message, status_code=response.status_code, payload=payload)

        logger.info(f"Food item added: {item.name}")
        return payload if payload is not None else {}

    async def update(self, item: FoodItem) -> Any:
        """
        Replace an existing item on the server.

        Raises:
            ClientValidationError: If the item has no id or required fields
                are blank
            UpdateError: With the server's message on a non-OK status
            NetworkError: If the request never completed
        """
        if item.id is None:
            raise ClientValidationError("Cannot update an item that has not been created")
        self._validate(item)
        data, files = item_to_form(item)

        response = await send_request(
            self._client,
            "PUT",
            self._settings.item_url(item.id),
            data=data,
            files=files or None,
        )
        payload = read_error_payload(response)

        if not response.is_success:
            message = extract_error_message(payload, "Failed to update food item")
            logger.warning(f"Update of item {item.id} rejected ({response.status_code}): {message}")
            raise UpdateError(message, status_code=response.status_code, payload=payload)

        logger.info(f"Food item {item.id} updated")
        return payload if payload is not None else {}

    @staticmethod
    def _validate(item: FoodItem) -> None:
        if not item.name.strip():
            raise ClientValidationError("Name is required")
        if not item.description.strip():
            raise ClientValidationError("Description is required")
        if not item.default_unit.name:
            raise ClientValidationError("Unit name is required")


class ItemCache:
    """
    Ordered in-memory projection of the item collection.

    Single owner, single event loop; no locking.
    """

    def __init__(self, items: Iterable[FoodItem] = ()):
        self._items: list[FoodItem] = list(items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[FoodItem]:
        return list(self._items)

    def replace_all(self, items: Iterable[FoodItem]) -> None:
        self._items = list(items)

    def add(self, item: FoodItem) -> None:
        self._items.append(item)

    def apply_update(self, item: FoodItem) -> bool:
        """
        Replace the cached entry with the same id.

        Returns:
            True if an entry was replaced, False if no entry matched
        """
        for index, cached in enumerate(self._items):
            if cached.id == item.id:
                self._items[index] = item
                return True
        return False

    def get(self, item_id: int) -> Optional[FoodItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def available(self) -> list[FoodItem]:
        return [item for item in self._items if item.is_available]

    def unavailable(self) -> list[FoodItem]:
        return [item for item in self._items if not item.is_available]
