"""
HTTP client for the partner/product backend API.

Wraps httpx.Client with the API key header and JSON bodies. Use it as a
context manager so the connection pool is closed:

    with APIClient() as api:
        product = api.get_product_by_gtin("00312345678906")
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .config import API_BASE_URL, API_KEY, API_TIMEOUT


logger = logging.getLogger(__name__)


class APIError(Exception):
    """
    Raised when a backend request fails.

    status is the HTTP status code, or 0 when no response was received.
    """

    def __init__(self, message: str, status: int) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class APIClient:
    """Synchronous client for the backend's /api/partners and /api/products routes."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or API_BASE_URL).rstrip("/")
        self._api_key = API_KEY if api_key is None else api_key
        self._timeout = API_TIMEOUT if timeout is None else timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> APIClient:
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={
                "Content-Type": "application/json",
                "X-API-Key": self._api_key,
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            raise RuntimeError(
                "APIClient must be used as a context manager: with APIClient() as api: ..."
            )
        return self._client

    def request(self, endpoint: str, method: str = "GET", body: Any = None) -> Any:
        """
        Send a request and return the decoded JSON response.

        Returns:
            Parsed JSON, or None for 204 No Content

        Raises:
            APIError: on a non-2xx response or a transport failure
        """
        client = self._ensure_client()
        content = json.dumps(body) if body is not None else None
        try:
            response = client.request(method, endpoint, content=content)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, endpoint, exc)
            raise APIError(str(exc) or "Network error", 0) from exc

        if not response.is_success:
            try:
                error = response.json()
            except ValueError:
                error = {"error": "Unknown error"}
            message = error.get("error") if isinstance(error, dict) else None
            raise APIError(message or "Request failed", response.status_code)

        if response.status_code == 204:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise APIError("Invalid JSON response", response.status_code) from exc

    # Partners

    def get_partners(self) -> Any:
        return self.request("/api/partners")

    def add_partner(self, role: str, name: str, gln: str) -> Any:
        return self.request("/api/partners", "POST", {"role": role, "name": name, "gln": gln})

    def delete_partner(self, partner_id: Any) -> Any:
        return self.request(f"/api/partners/{partner_id}", "DELETE")

    # Products

    def get_products(self) -> Any:
        return self.request("/api/products")

    def get_product_by_gtin(self, gtin: str) -> Optional[Dict[str, Any]]:
        """Fetch one product; None when the backend answers 404."""
        try:
            return self.request(f"/api/products/{gtin}")
        except APIError as exc:
            if exc.status == 404:
                return None
            raise

    def add_product(self, product: Dict[str, Any]) -> Any:
        return self.request("/api/products", "POST", product)

    def delete_product(self, gtin: str) -> Any:
        return self.request(f"/api/products/{gtin}", "DELETE")
