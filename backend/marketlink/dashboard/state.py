"""
Supermarket dashboard state

Holds what the dashboard screen shows (catalog, cart, orders, profile,
error and toast messages) and runs the user actions against the API.
One instance per logged-in session; actions run one at a time.

Author: TM3
Date: 2026-10-19
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from marketlink.core.exceptions import EmptyCartError, NetworkOrServerError, ValidationError
from marketlink.dashboard.api_client import MarketLinkClient
from marketlink.dashboard.cart import Cart, CheckoutDetails
from marketlink.dashboard.catalog import filter_products
from marketlink.dashboard.checkout import OrderSubmitter
from marketlink.dashboard.session import ClientSession
from marketlink.domain.order import Order
from marketlink.domain.product import Product

logger = logging.getLogger(__name__)

TABS = ("products", "cart", "orders", "profile")


@dataclass
class DashboardStats:
    products: int
    cart_items: int
    orders: int
    pending_orders: int
    total: Decimal


class SupermarketDashboard:
    """
    Session-level controller for the supermarket dashboard

    Loader failures are recorded in `error` instead of raised, so a failed
    refresh never discards what is already on screen.
    """

    def __init__(self, session: ClientSession, client: MarketLinkClient = None):
        self.session = session
        self.client = client or MarketLinkClient(session)
        self.submitter = OrderSubmitter(self.client)
        self.cart = Cart()

        self.products: List[Product] = []
        self.orders: List[Order] = []
        self.profile: Optional[dict] = None

        self.tab = "products"
        self.query = ""
        self.error = ""
        self.toast = ""

        self.loading_products = False
        self.loading_orders = False
        self.loading_profile = False
        self.placing = False

    # ------------------------------------------------------------------
    # Loaders
    # ------------------------------------------------------------------

    async def load_products(self) -> None:
        self.error = ""
        self.loading_products = True
        try:
            self.products = await self.client.list_products()
        except NetworkOrServerError as e:
            self.error = e.message or "Products load failed"
        finally:
            self.loading_products = False

    async def load_orders(self) -> None:
        self.error = ""
        self.loading_orders = True
        try:
            self.orders = await self.client.list_orders()
        except NetworkOrServerError as e:
            self.error = e.message or "Orders load failed"
        finally:
            self.loading_orders = False

    async def load_profile(self) -> None:
        self.error = ""
        self.loading_profile = True
        try:
            self.profile = await self.client.fetch_profile()
        except NetworkOrServerError as e:
            self.error = e.message or "Profile load failed"
        finally:
            self.loading_profile = False

    async def refresh(self) -> None:
        await self.load_profile()
        await self.load_products()
        await self.load_orders()

    # ------------------------------------------------------------------
    # Navigation / catalog
    # ------------------------------------------------------------------

    def switch_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab '{tab}'")
        self.tab = tab

    def visible_products(self) -> List[Product]:
        return filter_products(self.products, self.query)

    # ------------------------------------------------------------------
    # Cart actions
    # ------------------------------------------------------------------

    def add_to_cart(self, product: Product) -> bool:
        """Add one unit; on rejection the reason is shown in `error`"""
        self.error = ""
        try:
            self.cart.add(product)
        except ValidationError as e:
            self.error = e.message
            return False

        self.toast = "Added to cart"
        return True

    def update_quantity(self, product_id: str, quantity) -> None:
        self.cart.set_quantity(product_id, quantity)

    def increment(self, product_id: str) -> None:
        self.cart.increment(product_id)

    def decrement(self, product_id: str) -> None:
        self.cart.decrement(product_id)

    def open_checkout(self) -> bool:
        if self.cart.is_empty or self.placing:
            return False
        self.cart.checkout_open = True
        return True

    def clear_cart(self) -> None:
        self.cart.clear()
        self.toast = "Cart cleared"

    async def place_order(self, details: CheckoutDetails = None) -> Optional[Order]:
        """
        Submit the cart, then reload the order list

        Returns:
            The created order, or None when validation or the request failed
        """
        self.error = ""
        self.placing = True
        try:
            order = await self.submitter.submit(self.cart, details)
        except EmptyCartError as e:
            self.error = e.message
            self.tab = "products"
            return None
        except ValidationError as e:
            self.error = e.message
            return None
        except NetworkOrServerError as e:
            self.error = e.message or "Place order failed"
            return None
        finally:
            self.placing = False

        self.toast = "Order placed successfully"
        self.tab = "orders"
        await self.load_orders()
        return order

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def stats(self) -> DashboardStats:
        return DashboardStats(
            products=len(self.products),
            cart_items=self.cart.item_count(),
            orders=len(self.orders),
            pending_orders=sum(1 for order in self.orders if order.is_pending),
            total=self.cart.total(),
        )
