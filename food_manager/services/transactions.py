"""
Transaction History

Read-only list of past orders. This is the one endpoint that needs a token,
so it goes through AuthenticatedClient and can end the session on 401.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from food_manager.core.config import Settings, get_settings
from food_manager.errors import ServerRejection
from food_manager.schemas import Transaction
from food_manager.services.http import AuthenticatedClient, read_json

logger = logging.getLogger(__name__)


class TransactionService:
    """Fetches transaction records for the logged-in user."""

    def __init__(self, client: AuthenticatedClient, settings: Optional[Settings] = None):
        self._client = client
        self._settings = settings or get_settings()

    async def fetch_all(self) -> list[Transaction]:
        """
        Raises:
            AuthExpired: On 401 or when nobody is logged in
            ServerRejection: On any other non-OK status or malformed body
            NetworkError: If the request never completed
        """
        response = await self._client.get(self._settings.transactions_url)

        if not response.is_success:
            raise ServerRejection("Failed to fetch transactions", status_code=response.status_code)

        data = read_json(response)
        if not isinstance(data, list):
            raise ServerRejection("Failed to fetch transactions", status_code=response.status_code, payload=data)

        try:
            transactions = [Transaction.model_validate(record) for record in data]
        except ValidationError as e:
            logger.error(f"Malformed transaction record: {e}")
            raise ServerRejection("Failed to fetch transactions", payload=data) from e

        logger.info(f"Fetched {len(transactions)} transactions")
        return transactions
