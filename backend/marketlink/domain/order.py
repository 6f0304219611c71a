"""
Order Domain Models

Represents order-related entities in the MarketLink system.
These are the single source of truth for order data structure.

Author: TM3
Date: 2026-10-19
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal

MAX_LINE_QUANTITY = 999


class PaymentMethod(str, Enum):
    """Accepted payment methods at checkout"""
    CASH = "cash"
    CARD = "card"
    BANK = "bank"


class OrderItem(BaseModel):
    """
    Order Item domain model - represents a line item in an order

    Fields:
        product_id: Reference to product catalog
        product_name: Product name at time of order
        qty: Number of units ordered
        price: Price per unit at time of order
    """

    product_id: str = Field(..., description="Product ID")
    product_name: Optional[str] = Field(None, description="Product name at order time")
    qty: int = Field(..., description="Quantity ordered", ge=0)
    price: Decimal = Field(Decimal('0'), description="Price per unit", ge=0)

    model_config = ConfigDict(from_attributes=True)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.qty

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        data['price'] = float(data['price'])
        data['subtotal'] = float(self.subtotal)
        return data


class Order(BaseModel):
    """
    Order domain model - represents a supermarket's order to one supplier

    Fields:
        id: Order ID
        supplier_id: Supplier receiving the order
        supermarket_id: Buyer that placed the order
        items: Order lines
        status: Free-form lifecycle status (compared case-insensitively)
        total_amount: Order total
        delivery_address / delivery_date: Checkout delivery details
        payment_method: cash, card or bank
        note: Buyer note
        created_at / updated_at: Timestamps

        # From JOINs (optional)
        supplier_name: Supplier name
        supermarket_name: Buyer name
    """

    id: str = Field(..., description="Order ID")
    supplier_id: Optional[str] = Field(None, description="Supplier ID")
    supermarket_id: Optional[str] = Field(None, description="Supermarket (buyer) ID")
    items: List[OrderItem] = Field(default_factory=list, description="Order items")

    status: Optional[str] = Field(None, description="Order status")
    total_amount: Decimal = Field(Decimal('0'), description="Total order amount", ge=0)

    delivery_address: Optional[str] = Field(None, description="Delivery address")
    delivery_date: Optional[date] = Field(None, description="Requested delivery date")
    payment_method: Optional[str] = Field(None, description="Payment method")
    note: Optional[str] = Field(None, description="Buyer note")

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    supplier_name: Optional[str] = Field(None, description="Supplier name (from JOIN)")
    supermarket_name: Optional[str] = Field(None, description="Supermarket name (from JOIN)")

    model_config = ConfigDict(from_attributes=True)

    # Computed properties
    @property
    def item_count(self) -> int:
        """Number of lines in order"""
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all items"""
        return sum(item.qty for item in self.items)

    @property
    def display_status(self) -> str:
        """Status as shown on the dashboard; orders without one read as PENDING"""
        return self.status or "PENDING"

    @property
    def is_pending(self) -> bool:
        """True only for an explicit status containing "pending"; a missing status is not pending"""
        return "pending" in (self.status or "").lower()

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties
        """
        data = self.model_dump()

        data['item_count'] = self.item_count
        data['total_quantity'] = self.total_quantity
        data['total_amount'] = float(data['total_amount'])

        for field in ['created_at', 'updated_at', 'delivery_date']:
            if data.get(field):
                data[field] = data[field].isoformat()

        data['items'] = [item.to_dict() for item in self.items]

        return data


class OrderLineCreate(BaseModel):
    """One line of an order request; price is the snapshot taken at checkout"""
    product_id: str
    qty: int = Field(..., ge=1, le=MAX_LINE_QUANTITY)
    price: Decimal = Field(..., ge=0)


class OrderCreate(BaseModel):
    """Schema for creating a new order (the dashboard's checkout payload)"""
    supplier_id: str
    items: List[OrderLineCreate]
    delivery_address: str = ""
    delivery_date: Optional[date] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    note: Optional[str] = ""
    total_amount: Decimal = Field(Decimal('0'), ge=0)

    @field_validator('delivery_date', mode='before')
    @classmethod
    def blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator('payment_method', mode='before')
    @classmethod
    def default_payment_method(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return PaymentMethod.CASH
        return value

    @property
    def computed_total(self) -> Decimal:
        return sum((line.price * line.qty for line in self.items), Decimal('0'))

    def to_payload(self) -> dict:
        """JSON body sent to POST /api/orders"""
        return self.model_dump(mode="json")


class OrderStatusUpdate(BaseModel):
    """Schema for updating an order's status"""
    status: str

    @field_validator('status')
    @classmethod
    def status_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("status must not be empty")
        return value
