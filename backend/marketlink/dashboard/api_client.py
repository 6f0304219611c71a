"""
MarketLink API Client
Async HTTP client used by the supermarket dashboard (and supplier tools)

Author: TM3
Date: 2026-10-19
"""
import logging
from typing import List, Optional, Tuple

import httpx

from marketlink.core.exceptions import NetworkOrServerError, ProfileUnavailableError
from marketlink.dashboard.normalize import (
    Body,
    error_message,
    normalize_buyer,
    normalize_many,
    normalize_order,
    normalize_product,
    parse_body,
    unwrap_list,
    unwrap_record,
)
from marketlink.dashboard.session import ClientSession
from marketlink.domain.order import Order, OrderCreate
from marketlink.domain.product import Product
from marketlink.domain.supermarket import BuyerSummary

logger = logging.getLogger(__name__)

# Tried in this order; the first successful JSON body wins
PROFILE_ENDPOINTS = (
    "/api/supermarket/me",
    "/api/auth/me",
)


class MarketLinkClient:
    """
    Client for the MarketLink REST API

    Handles:
    - Catalog and order reads (normalized into domain models)
    - Order submission and status updates
    - Buyer aggregation for suppliers
    - Profile lookup with endpoint fallback

    Every non-2xx answer or transport failure raises NetworkOrServerError
    with the message extracted from the response body.
    """

    def __init__(self, session: ClientSession, transport: httpx.AsyncBaseTransport = None):
        """
        Initialize client

        Args:
            session: Base URL and bearer token of the current user
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.session = session
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.session.base_url,
            headers=self.session.headers(),
            timeout=self.session.timeout,
            transport=self.transport,
        )

    async def _send(self, method: str, path: str, **kwargs) -> Tuple[httpx.Response, Body]:
        async with self._client() as client:
            response = await client.request(method, path, **kwargs)
        return response, parse_body(response)

    async def _request(self, method: str, path: str, fallback: str, **kwargs) -> Body:
        """Send a request and return the decoded body of a 2xx answer"""
        try:
            response, body = await self._send(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkOrServerError(str(e) or fallback)

        if not response.is_success:
            message = error_message(body, fallback)
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise NetworkOrServerError(message, status_code=response.status_code)

        return body

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def list_products(self) -> List[Product]:
        body = await self._request("GET", "/api/products", "Failed to load products")
        return normalize_many(unwrap_list(body, "products"), normalize_product)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    async def list_orders(self) -> List[Order]:
        """Order history of the current supermarket"""
        body = await self._request("GET", "/api/orders", "Failed to load orders")
        return normalize_many(unwrap_list(body, "orders"), normalize_order)

    async def list_supplier_orders(self, status: Optional[str] = None) -> List[Order]:
        """Incoming orders of the current supplier"""
        params = {"status": status} if status else None
        body = await self._request("GET", "/api/orders/supplier", "Failed to load orders", params=params)
        return normalize_many(unwrap_list(body, "orders"), normalize_order)

    async def get_order(self, order_id: str) -> Order:
        body = await self._request("GET", f"/api/orders/{order_id}", "Failed to load order")
        return normalize_many([unwrap_record(body)], normalize_order)[0]

    async def create_order(self, request: OrderCreate) -> Order:
        body = await self._request("POST", "/api/orders", "Order failed", json=request.to_payload())
        return normalize_many([unwrap_record(body)], normalize_order)[0]

    async def update_order_status(self, order_id: str, status: str) -> Order:
        body = await self._request(
            "PATCH", f"/api/orders/{order_id}/status", "Status update failed",
            json={"status": status}
        )
        return normalize_many([unwrap_record(body)], normalize_order)[0]

    # ------------------------------------------------------------------
    # Supplier aggregation
    # ------------------------------------------------------------------

    async def list_buyers(self) -> List[BuyerSummary]:
        body = await self._request("GET", "/api/supermarkets/buyers", "Failed to load buyers")
        return normalize_many(unwrap_list(body, "buyers"), normalize_buyer)

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    async def _try_profile(self, path: str) -> Optional[dict]:
        """GET a profile candidate; None when it is unreachable or not 2xx"""
        try:
            response, body = await self._send("GET", path)
        except httpx.HTTPError as e:
            logger.info(f"Profile endpoint {path} unreachable: {e}")
            return None

        if not response.is_success or not isinstance(body, dict):
            logger.info(f"Profile endpoint {path} answered {response.status_code}")
            return None
        return body

    async def fetch_profile(self, candidates: Tuple[str, ...] = PROFILE_ENDPOINTS) -> dict:
        """
        Profile of the current user

        Candidates are tried in order; the first successful body is returned.

        Raises:
            ProfileUnavailableError: every candidate failed
        """
        for path in candidates:
            profile = await self._try_profile(path)
            if profile is not None:
                return profile

        raise ProfileUnavailableError()
