"""
Client-side catalog helpers
"""
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from marketlink.domain.product import Product


def filter_products(products: Iterable[Product], query: Optional[str]) -> List[Product]:
    """Products whose name, description or category contains the query (case-insensitive)"""
    products = list(products)
    if not (query or "").strip():
        return products
    return [product for product in products if product.matches(query)]


def format_money(value: Union[Decimal, float, int, None]) -> str:
    """Amounts as shown on the dashboard, e.g. "Rs. 10.00" """
    try:
        amount = Decimal(str(value or 0))
    except ArithmeticError:
        amount = Decimal("0")
    if not amount.is_finite():
        amount = Decimal("0")
    return f"Rs. {amount.quantize(Decimal('0.01'))}"
