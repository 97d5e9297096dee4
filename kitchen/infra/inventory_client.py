"""HTTP client for the remote inventory/waste API (bearer-token authenticated)."""
import logging
from typing import Any, List, Optional

import httpx

from kitchen.utilities.config import INVENTORY_API_TIMEOUT, INVENTORY_API_TOKEN, INVENTORY_API_URL
from kitchen.utilities.validators import StockItemInput, WasteEventInput

logger = logging.getLogger(__name__)


class InventoryAPIError(Exception):
    """Raised when the inventory API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InventoryClient:
    def __init__(self, base_url: str = INVENTORY_API_URL, token: str = INVENTORY_API_TOKEN,
                 timeout: float = INVENTORY_API_TIMEOUT, transport: Optional[httpx.BaseTransport] = None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.Client(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Inventory API %s %s failed: %s %s", method, path, status, e.response.text)
            raise InventoryAPIError(f"Inventory API returned {status} for {path}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.error("Inventory API %s %s unreachable: %s", method, path, e)
            raise InventoryAPIError(f"Inventory API unreachable: {e}") from e
        if not response.content:
            return None
        return response.json()

    # --- Stock -------------------------------------------------------------
    def get_stock_items(self) -> List[dict]:
        return self._request("GET", "/api/stock") or []

    def add_stock_item(self, item: StockItemInput) -> dict:
        return self._request("POST", "/api/stock", json=item.model_dump(by_alias=True))

    # --- Waste -------------------------------------------------------------
    def get_all_waste(self) -> List[dict]:
        return self._request("GET", "/api/waste") or []

    def get_waste_by_ingredient(self, ingredient_id) -> List[dict]:
        return self._request("GET", f"/api/waste/ingredient/{ingredient_id}") or []

    def register_waste(self, waste: WasteEventInput) -> dict:
        logger.info("Registering waste for ingredient %s (%s)", waste.ingredient_id, waste.quantity)
        return self._request("POST", "/api/waste", json=waste.to_payload())


__all__ = ["InventoryClient", "InventoryAPIError"]
