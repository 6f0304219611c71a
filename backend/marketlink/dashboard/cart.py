"""
Single-supplier shopping cart

All lines of a non-empty cart belong to the same supplier. Quantities live
in [0, 999]; a line that reaches 0 is removed.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterator, List, Optional, Union

from marketlink.core.exceptions import MixedSupplierError, NoSupplierError
from marketlink.dashboard.normalize import to_quantity
from marketlink.domain.order import MAX_LINE_QUANTITY, PaymentMethod
from marketlink.domain.product import Product


@dataclass
class CartLine:
    item: Product
    quantity: int = 1

    @property
    def subtotal(self) -> Decimal:
        price = self.item.price
        if price is None or not price.is_finite():
            return Decimal("0")
        return price * (self.quantity or 0)


@dataclass
class CheckoutDetails:
    """Checkout form state (delivery, payment, note)"""
    delivery_address: str = ""
    delivery_date: Optional[Union[str, date]] = None
    payment_method: Optional[str] = PaymentMethod.CASH.value
    note: str = ""


def _clamp(quantity: int) -> int:
    return max(0, min(MAX_LINE_QUANTITY, quantity))


@dataclass
class Cart:
    """
    In-memory cart of (item, quantity) lines keyed by item ID

    Insertion order is kept for display. The cart also owns the pending
    checkout form so that clearing the cart resets it.
    """

    _lines: Dict[str, CartLine] = field(default_factory=dict)
    checkout: CheckoutDetails = field(default_factory=CheckoutDetails)
    checkout_open: bool = False

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._lines

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def get(self, item_id: str) -> Optional[CartLine]:
        return self._lines.get(item_id)

    def supplier_id(self) -> Optional[str]:
        """Supplier shared by every line, None for an empty cart"""
        for line in self._lines.values():
            return line.item.supplier_id
        return None

    def add(self, item: Product) -> CartLine:
        """
        Add one unit of an item

        Raises:
            NoSupplierError: the item has no supplier
            MixedSupplierError: the cart already holds another supplier's items
        """
        if not item.supplier_id:
            raise NoSupplierError()

        current = self.supplier_id()
        if current and item.supplier_id != current:
            raise MixedSupplierError()

        line = self._lines.get(item.id)
        if line is not None:
            line.quantity = _clamp(line.quantity + 1)
            return line

        line = CartLine(item=item, quantity=1)
        self._lines[item.id] = line
        return line

    def set_quantity(self, item_id: str, quantity) -> None:
        """
        Set a line's quantity, clamped to [0, 999]

        Non-numeric or non-finite input is ignored. 0 removes the line.
        """
        value = to_quantity(quantity)
        if value is None or item_id not in self._lines:
            return

        value = _clamp(value)
        if value == 0:
            del self._lines[item_id]
        else:
            self._lines[item_id].quantity = value

    def increment(self, item_id: str) -> None:
        line = self._lines.get(item_id)
        if line is not None:
            self.set_quantity(item_id, line.quantity + 1)

    def decrement(self, item_id: str) -> None:
        line = self._lines.get(item_id)
        if line is not None:
            self.set_quantity(item_id, line.quantity - 1)

    def clear(self) -> None:
        """Empty the cart and reset the checkout form"""
        self._lines.clear()
        self.checkout = CheckoutDetails()
        self.checkout_open = False

    def total(self) -> Decimal:
        return sum((line.subtotal for line in self._lines.values()), Decimal("0"))

    def item_count(self) -> int:
        return sum(line.quantity or 0 for line in self._lines.values())
