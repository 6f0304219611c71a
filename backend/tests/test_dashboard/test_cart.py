"""
Unit tests for the single-supplier Cart

Author: TM3
Date: 2026-10-19
"""
import pytest
from decimal import Decimal

from marketlink.core.exceptions import MixedSupplierError, NoSupplierError
from marketlink.dashboard.cart import Cart, CheckoutDetails
from marketlink.domain.product import Product


class TestCartAdd:
    """Test Cart.add and the single-supplier invariant"""

    def test_add_creates_line_with_quantity_one(self, item_a):
        cart = Cart()

        line = cart.add(item_a)

        assert line.quantity == 1
        assert "A" in cart
        assert cart.supplier_id() == "S1"

    def test_add_same_item_increments(self, item_a):
        cart = Cart()
        cart.add(item_a)
        cart.add(item_a)

        assert cart.get("A").quantity == 2
        assert len(cart) == 1

    def test_add_caps_at_999(self, item_a):
        cart = Cart()
        cart.add(item_a)
        cart.set_quantity("A", 999)

        cart.add(item_a)

        assert cart.get("A").quantity == 999

    def test_add_other_supplier_is_rejected(self, item_a, item_b):
        """A (S1, 10.00) then B (S2, 5.00): B rejected, cart stays [A x1]"""
        cart = Cart()
        cart.add(item_a)

        with pytest.raises(MixedSupplierError):
            cart.add(item_b)

        assert [line.item.id for line in cart.lines()] == ["A"]
        assert cart.get("A").quantity == 1
        assert cart.total() == Decimal("10.00")

    def test_add_other_supplier_after_clear(self, item_a, item_b):
        cart = Cart()
        cart.add(item_a)
        cart.clear()

        cart.add(item_b)

        assert cart.supplier_id() == "S2"

    def test_add_same_supplier_different_item(self, item_a, item_c):
        cart = Cart()
        cart.add(item_a)
        cart.add(item_c)

        assert [line.item.id for line in cart.lines()] == ["A", "C"]

    def test_add_without_supplier_is_rejected(self):
        cart = Cart()
        orphan = Product(id="X", name="Loose Sugar", price=Decimal("1.00"))

        with pytest.raises(NoSupplierError):
            cart.add(orphan)

        assert cart.is_empty


class TestCartQuantity:
    """Test set_quantity / increment / decrement"""

    @pytest.mark.parametrize("quantity", [1, 2, 17, 500, 998, 999])
    def test_set_quantity_in_range(self, item_a, quantity):
        cart = Cart()
        cart.add(item_a)

        cart.set_quantity("A", quantity)

        assert cart.get("A").quantity == quantity

    def test_set_quantity_zero_removes_line(self, item_a):
        cart = Cart()
        cart.add(item_a)

        cart.set_quantity("A", 0)

        assert "A" not in cart
        assert cart.supplier_id() is None

    def test_set_quantity_above_cap_clamps(self, item_a):
        cart = Cart()
        cart.add(item_a)

        cart.set_quantity("A", 5000)

        assert cart.get("A").quantity == 999

    @pytest.mark.parametrize("huge", [10 ** 400, str(10 ** 400), Decimal("1e400")])
    def test_set_quantity_huge_values_clamp(self, item_a, huge):
        cart = Cart()
        cart.add(item_a)

        cart.set_quantity("A", huge)

        assert cart.get("A").quantity == 999

    def test_set_quantity_huge_negative_removes_line(self, item_a):
        cart = Cart()
        cart.add(item_a)

        cart.set_quantity("A", -(10 ** 400))

        assert "A" not in cart

    def test_set_quantity_negative_removes_line(self, item_a):
        cart = Cart()
        cart.add(item_a)

        cart.set_quantity("A", -3)

        assert "A" not in cart

    @pytest.mark.parametrize("bad", ["abc", "", None, float("nan"), float("inf"), object()])
    def test_set_quantity_invalid_input_is_ignored(self, item_a, bad):
        cart = Cart()
        cart.add(item_a)
        cart.set_quantity("A", 4)

        cart.set_quantity("A", bad)

        assert cart.get("A").quantity == 4

    def test_set_quantity_accepts_numeric_strings(self, item_a):
        cart = Cart()
        cart.add(item_a)

        cart.set_quantity("A", "12")

        assert cart.get("A").quantity == 12

    def test_set_quantity_unknown_item_is_noop(self, item_a):
        cart = Cart()
        cart.add(item_a)

        cart.set_quantity("missing", 3)

        assert len(cart) == 1

    def test_increment_then_decrement_restores_state(self, item_a, item_c):
        cart = Cart()
        cart.add(item_a)
        cart.add(item_c)
        cart.set_quantity("C", 7)
        before = [(line.item.id, line.quantity) for line in cart.lines()]

        cart.increment("C")
        cart.decrement("C")

        assert [(line.item.id, line.quantity) for line in cart.lines()] == before

    def test_decrement_to_zero_removes_line(self, item_a):
        cart = Cart()
        cart.add(item_a)

        cart.decrement("A")

        assert cart.is_empty

    def test_increment_respects_cap(self, item_a):
        cart = Cart()
        cart.add(item_a)
        cart.set_quantity("A", 999)

        cart.increment("A")

        assert cart.get("A").quantity == 999


class TestCartTotals:
    """Test total() and item_count()"""

    def test_empty_cart_total_is_zero(self):
        assert Cart().total() == Decimal("0")

    def test_total_is_exact_sum(self, item_a, item_c):
        cart = Cart()
        cart.add(item_a)
        cart.add(item_c)
        cart.set_quantity("A", 3)
        cart.set_quantity("C", 4)

        # 3 x 10.00 + 4 x 2.50
        assert cart.total() == Decimal("40.00")
        assert cart.item_count() == 7

    def test_missing_price_counts_as_zero(self, item_a):
        cart = Cart()
        cart.add(item_a)
        cart.add(Product(id="F", name="Free Sample", price=None, supplier_id="S1"))

        assert cart.total() == Decimal("10.00")


class TestCartClear:

    def test_clear_resets_checkout_form(self, item_a):
        cart = Cart()
        cart.add(item_a)
        cart.checkout_open = True
        cart.checkout = CheckoutDetails(delivery_address="45 Temple St", payment_method="card", note="Back gate")

        cart.clear()

        assert cart.is_empty
        assert cart.checkout_open is False
        assert cart.checkout == CheckoutDetails()
        assert cart.checkout.payment_method == "cash"
