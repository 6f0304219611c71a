"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models.
Also hosts the supplier-side buyer aggregation query.

Author: TM3
Date: 2026-10-19
"""
import logging
from decimal import Decimal
from typing import List, Optional, Tuple, Dict, Any

from marketlink.domain.order import Order, OrderItem, OrderCreate
from marketlink.core.database import get_db_connection_dict

logger = logging.getLogger(__name__)

ORDER_SELECT = """
    SELECT
        o.id, o.supplier_id, o.supermarket_id,
        o.status, o.total_amount,
        o.delivery_address, o.delivery_date, o.payment_method, o.note,
        o.created_at, o.updated_at,
        s.name as supplier_name,
        sm.name as supermarket_name
    FROM orders o
    LEFT JOIN suppliers s ON o.supplier_id = s.id
    LEFT JOIN supermarkets sm ON o.supermarket_id = sm.id
"""


class OrderRepository:
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    Returns Order domain models with their items.
    """

    @staticmethod
    def _attach_items(cursor, order_rows: List[dict]) -> List[Order]:
        """Load items for all given orders in ONE query and build Order models"""
        if not order_rows:
            return []

        order_ids = [row['id'] for row in order_rows]

        cursor.execute("""
            SELECT order_id, product_id, product_name, qty, price
            FROM order_items
            WHERE order_id = ANY(%s)
            ORDER BY order_id, id
        """, (order_ids,))

        items_by_order: Dict[str, List[OrderItem]] = {}
        for item in cursor.fetchall():
            item = dict(item)
            order_id = item.pop('order_id')
            items_by_order.setdefault(order_id, []).append(OrderItem(**item))

        orders = []
        for row in order_rows:
            order_dict = dict(row)
            order_dict['items'] = items_by_order.get(row['id'], [])
            orders.append(Order(**order_dict))
        return orders

    def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find order by ID with supplier, supermarket and items

        Returns:
            Order with all related data or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(ORDER_SELECT + " WHERE o.id = %s", (order_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._attach_items(cursor, [row])[0]

        finally:
            cursor.close()
            conn.close()

    def find_for_supermarket(
        self,
        supermarket_id: str,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Order], int]:
        """
        Order history of one buyer, newest first

        Returns:
            Tuple of (list of orders, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT COUNT(*) as total
                FROM orders
                WHERE supermarket_id = %s
            """, (supermarket_id,))
            total = cursor.fetchone()['total']

            cursor.execute(ORDER_SELECT + """
                WHERE o.supermarket_id = %s
                ORDER BY o.created_at DESC
                LIMIT %s OFFSET %s
            """, (supermarket_id, limit, offset))

            return self._attach_items(cursor, cursor.fetchall()), total

        finally:
            cursor.close()
            conn.close()

    def find_for_supplier(
        self,
        supplier_id: str,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Order], int]:
        """
        Incoming orders of one supplier, newest first

        Args:
            supplier_id: Supplier receiving the orders
            status: Optional status filter (case-insensitive)

        Returns:
            Tuple of (list of orders, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = ["o.supplier_id = %s"]
            params: List[Any] = [supplier_id]

            if status:
                conditions.append("LOWER(o.status) = LOWER(%s)")
                params.append(status)

            where_clause = " AND ".join(conditions)

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM orders o
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(ORDER_SELECT + f"""
                WHERE {where_clause}
                ORDER BY o.created_at DESC
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            return self._attach_items(cursor, cursor.fetchall()), total

        finally:
            cursor.close()
            conn.close()

    def create(
        self,
        supermarket_id: str,
        request: OrderCreate,
        product_names: Dict[str, str],
        total_amount: Decimal
    ) -> Order:
        """
        Insert an order and its lines in a single transaction

        Args:
            supermarket_id: Buyer placing the order
            request: Validated order request
            product_names: Product ID -> name snapshot
            total_amount: Total to store

        Returns:
            The created Order
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO orders (
                    supplier_id, supermarket_id, status, total_amount,
                    delivery_address, delivery_date, payment_method, note
                ) VALUES (
                    %s, %s, 'pending', %s, %s, %s, %s, %s
                )
                RETURNING id, supplier_id, supermarket_id, status, total_amount,
                          delivery_address, delivery_date, payment_method, note,
                          created_at, updated_at
            """, (
                request.supplier_id,
                supermarket_id,
                total_amount,
                request.delivery_address.strip(),
                request.delivery_date,
                request.payment_method.value,
                request.note or None,
            ))
            order_row = dict(cursor.fetchone())

            items = []
            for line in request.items:
                name = product_names.get(line.product_id)
                cursor.execute("""
                    INSERT INTO order_items (order_id, product_id, product_name, qty, price)
                    VALUES (%s, %s, %s, %s, %s)
                """, (order_row['id'], line.product_id, name, line.qty, line.price))
                items.append(OrderItem(
                    product_id=line.product_id,
                    product_name=name,
                    qty=line.qty,
                    price=line.price
                ))

            conn.commit()

            order_row['items'] = items
            return Order(**order_row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def update_status(self, order_id: str, supplier_id: str, status: str) -> Optional[Order]:
        """
        Set the status of an order owned by the supplier

        Returns:
            Updated Order, or None if no order with that ID belongs to the supplier
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE orders
                SET status = %s, updated_at = NOW()
                WHERE id = %s AND supplier_id = %s
                RETURNING id
            """, (status, order_id, supplier_id))

            updated = cursor.fetchone()
            conn.commit()

            if not updated:
                return None

            cursor.execute(ORDER_SELECT + " WHERE o.id = %s", (order_id,))
            return self._attach_items(cursor, [cursor.fetchone()])[0]

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def aggregate_by_buyer(self, supplier_id: str) -> List[Dict[str, Any]]:
        """
        Group a supplier's orders by buyer in one round trip

        Returns:
            Rows of {supermarket_id, total_orders, total_revenue, last_order_date},
            highest revenue first, ties by supermarket_id
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    supermarket_id,
                    COUNT(*) as total_orders,
                    COALESCE(SUM(total_amount), 0) as total_revenue,
                    MAX(created_at) as last_order_date
                FROM orders
                WHERE supplier_id = %s
                GROUP BY supermarket_id
                ORDER BY total_revenue DESC, supermarket_id ASC
            """, (supplier_id,))

            return [dict(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()
