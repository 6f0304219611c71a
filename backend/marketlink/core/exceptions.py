"""
Domain exceptions shared by the backend services and the dashboard client.

Validation errors abort the operation that raised them and are shown to
the user as-is. Network/server errors carry the message extracted from the
response body.
"""
from typing import Optional


class MarketLinkError(Exception):
    """Base class for every MarketLink error"""

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    default_message = "Unexpected error"


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(MarketLinkError):
    default_message = "Invalid request"


class EmptyCartError(ValidationError):
    default_message = "Cart is empty."


class MissingSupplierError(ValidationError):
    default_message = "Cannot place order: supplier not found for cart items."


class MissingAddressError(ValidationError):
    default_message = "Delivery address is required."


class NoSupplierError(ValidationError):
    default_message = "This product has no supplier info."


class MixedSupplierError(ValidationError):
    default_message = "Cart can contain products from ONE supplier only. Clear cart to switch supplier."


class InvalidPaymentMethodError(ValidationError):
    default_message = "Payment method must be one of: cash, card, bank."


class ProductNotFoundError(ValidationError):
    default_message = "Product not found."


# =============================================================================
# Lookup / Transport Errors
# =============================================================================

class OrderNotFoundError(MarketLinkError):
    default_message = "Order not found"


class NetworkOrServerError(MarketLinkError):
    """A request failed in transit or the server answered with a non-2xx status"""

    default_message = "Request failed"

    def __init__(self, message: str = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProfileUnavailableError(NetworkOrServerError):
    default_message = "Cannot load profile (no working /me endpoint)."
