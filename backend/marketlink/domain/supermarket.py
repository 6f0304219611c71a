"""
Supermarket (buyer) and Supplier Domain Models

Author: TM3
Date: 2026-10-19
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from decimal import Decimal

UNKNOWN_BUYER_NAME = "Unknown"


class Supermarket(BaseModel):
    """
    Supermarket domain model - a buyer in the directory

    Used as the profile returned by /api/supermarket/me and as the
    metadata source for buyer summaries.
    """

    id: str = Field(..., description="Supermarket ID")
    name: str = Field(..., description="Supermarket name")
    contact_email: Optional[str] = Field(None, description="Contact email")
    address: Optional[str] = Field(None, description="Address")
    phone: Optional[str] = Field(None, description="Phone")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = ConfigDict(from_attributes=True)


class Supplier(BaseModel):
    """Supplier domain model (lightweight, for order context)"""

    id: str = Field(..., description="Supplier ID")
    name: str = Field(..., description="Supplier name")
    contact_email: Optional[str] = Field(None, description="Contact email")
    address: Optional[str] = Field(None, description="Address")

    model_config = ConfigDict(from_attributes=True)


class BuyerSummary(BaseModel):
    """
    Per-buyer aggregate for one supplier

    Computed on every request from the supplier's orders; never stored.
    """

    supermarket_id: str = Field(..., description="Supermarket ID")
    name: str = Field(UNKNOWN_BUYER_NAME, description="Supermarket name")
    contact_email: str = Field("", description="Contact email")
    address: str = Field("", description="Address")
    total_orders: int = Field(0, description="Number of orders", ge=0)
    total_revenue: Decimal = Field(Decimal('0'), description="Sum of order totals")
    last_order_date: Optional[datetime] = Field(None, description="Most recent order timestamp")

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['total_revenue'] = float(data['total_revenue'])
        if data.get('last_order_date'):
            data['last_order_date'] = data['last_order_date'].isoformat()
        return data
