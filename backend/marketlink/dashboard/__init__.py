"""
Supermarket dashboard client: cart, checkout and API access
"""
from marketlink.dashboard.api_client import MarketLinkClient
from marketlink.dashboard.cart import Cart, CartLine, CheckoutDetails
from marketlink.dashboard.checkout import OrderSubmitter
from marketlink.dashboard.session import ClientSession
from marketlink.dashboard.state import SupermarketDashboard

__all__ = [
    "MarketLinkClient",
    "Cart",
    "CartLine",
    "CheckoutDetails",
    "OrderSubmitter",
    "ClientSession",
    "SupermarketDashboard",
]
