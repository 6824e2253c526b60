"""
API client for the shop backend's POS endpoints.
"""

import logging
from typing import Dict, List, Any, Optional

import requests

from models import CatalogProduct, Order
from settings import PosSettings

logger = logging.getLogger(__name__)


class PosApiError(Exception):
    """Raised when a POS endpoint fails or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PosApiClient:
    """Client for the catalog, order and payment status endpoints."""

    def __init__(self, base_url: str = "http://localhost:5000/api", token: str = "",
                 timeout: int = 15, session: Optional[requests.Session] = None):
        """
        Initialize the API client.

        Args:
            base_url (str): Base URL of the backend API
            token (str): Staff bearer token
            timeout (int): Request timeout in seconds
            session (requests.Session): Session to reuse (tests inject one)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': 'POS-ScanStation/1.0'
        })
        if token:
            self.session.headers['Authorization'] = f"Bearer {token}"

    @classmethod
    def from_settings(cls, settings: PosSettings) -> "PosApiClient":
        return cls(settings.api_url, settings.api_token, settings.request_timeout)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            PosApiError: on connection failure, non-2xx status or invalid JSON
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise PosApiError(f"Connection error: {e}") from e

        if not response.ok:
            message = f"HTTP {response.status_code}"
            try:
                body = response.json()
                if isinstance(body, dict) and body.get("error"):
                    message = str(body["error"])
            except ValueError:
                pass
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise PosApiError(message, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise PosApiError(f"Invalid JSON from {path}", response.status_code) from e

    def search_products(self, query: str = "") -> List[CatalogProduct]:
        """
        Search the POS catalog by name, SKU or QR code.

        Args:
            query (str): Search text; empty returns the default product set

        Returns:
            list: CatalogProduct candidates, best backend match first
        """
        data = self._request("GET", "/admin/pos/products", params={"q": query})
        if not isinstance(data, list):
            return []
        return [CatalogProduct.from_dict(item) for item in data if isinstance(item, dict)]

    def create_order(self, order_request: Dict[str, Any]) -> Order:
        """
        Create a counter sale.

        Returns:
            Order: carries payment_url when the payment needs external confirmation
        """
        data = self._request("POST", "/admin/pos/orders", json=order_request)
        logger.info(f"POS order created: {data.get('order_number') if isinstance(data, dict) else data}")
        return Order.from_dict(data if isinstance(data, dict) else {})

    def check_status(self, order_id: Any) -> Order:
        """Fetch the current order and payment status."""
        data = self._request("GET", f"/admin/orders/{order_id}")
        return Order.from_dict(data if isinstance(data, dict) else {})

    def generate_qr_codes(self) -> Dict[str, Any]:
        """Assign QR codes to every product that has none yet."""
        data = self._request("POST", "/admin/pos/generate-qr", json={})
        return data if isinstance(data, dict) else {}
