"""
Product Domain Model

Represents a catalog item offered by a supplier.
This is the single source of truth for product data structure, both for
the API responses and for the dashboard client after normalization.

Author: TM3
Date: 2026-10-19
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from decimal import Decimal


class Product(BaseModel):
    """
    Product domain model - represents a purchasable item in the catalog

    Fields:
        id: Product ID
        name: Product name
        price: Unit price (None when the source had no usable price)
        category: Product category (optional)
        description: Product description (optional)
        supplier_id: Owning supplier (None when the record has no supplier)
        is_active: Whether product is listed in the catalog
        created_at: When product was created
        updated_at: When product was last updated
    """

    id: str = Field(..., description="Product ID")
    name: str = Field("", description="Product name")
    price: Optional[Decimal] = Field(None, description="Unit price", ge=0)
    category: Optional[str] = Field(None, description="Product category")
    description: Optional[str] = Field(None, description="Product description")
    supplier_id: Optional[str] = Field(None, description="Owning supplier ID")

    is_active: bool = Field(True, description="Is product listed")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def has_supplier(self) -> bool:
        return bool(self.supplier_id)

    def matches(self, query: str) -> bool:
        """Case-insensitive match against name, description and category"""
        needle = (query or "").strip().lower()
        if not needle:
            return True
        return any(
            needle in (value or "").lower()
            for value in (self.name, self.description, self.category)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()

        if data.get('price') is not None:
            data['price'] = float(data['price'])
        for field in ['created_at', 'updated_at']:
            if data.get(field):
                data[field] = data[field].isoformat()

        return data
