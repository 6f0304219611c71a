"""
Supermarket Repository - Buyer directory lookups

Author: TM3
Date: 2026-10-19
"""
from typing import Dict, Iterable, Optional
from marketlink.domain.supermarket import Supermarket
from marketlink.core.database import get_db_connection_dict


class SupermarketRepository:
    """Repository for the supermarket (buyer) directory"""

    def find_by_id(self, supermarket_id: str) -> Optional[Supermarket]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id, name, contact_email, address, phone, created_at
                FROM supermarkets
                WHERE id = %s
            """, (supermarket_id,))

            row = cursor.fetchone()
            return Supermarket(**row) if row else None

        finally:
            cursor.close()
            conn.close()

    def find_by_ids(self, supermarket_ids: Iterable[str]) -> Dict[str, Supermarket]:
        """
        Look up many buyers in one query

        Returns:
            Dict of supermarket ID -> Supermarket. IDs with no directory
            record are absent from the result.
        """
        supermarket_ids = [str(sid) for sid in supermarket_ids]
        if not supermarket_ids:
            return {}

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id, name, contact_email, address, phone, created_at
                FROM supermarkets
                WHERE id = ANY(%s)
            """, (supermarket_ids,))

            return {str(row['id']): Supermarket(**row) for row in cursor.fetchall()}

        finally:
            cursor.close()
            conn.close()
