"""
Supplier Buyer Service
Aggregates a supplier's orders per buyer and joins buyer directory data

Author: TM3
Date: 2026-10-19
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from marketlink.domain.supermarket import BuyerSummary, Supermarket, UNKNOWN_BUYER_NAME
from marketlink.repositories.order_repository import OrderRepository
from marketlink.repositories.supermarket_repository import SupermarketRepository

logger = logging.getLogger(__name__)


def build_buyer_summaries(
    rows: Iterable[Mapping],
    directory: Dict[str, Supermarket]
) -> List[BuyerSummary]:
    """
    Join grouped order rows with buyer metadata

    A buyer missing from the directory gets the "Unknown" placeholder and
    empty contact fields; the other buyers are unaffected.

    Result is ordered by revenue descending, then supermarket ID ascending.
    """
    summaries = []
    for row in rows:
        supermarket_id = str(row['supermarket_id'])
        buyer: Optional[Supermarket] = directory.get(supermarket_id)

        if buyer is None:
            logger.warning(f"Buyer {supermarket_id} not found in directory, using placeholder")

        summaries.append(BuyerSummary(
            supermarket_id=supermarket_id,
            name=(buyer.name if buyer else None) or UNKNOWN_BUYER_NAME,
            contact_email=(buyer.contact_email if buyer else None) or "",
            address=(buyer.address if buyer else None) or "",
            total_orders=int(row['total_orders'] or 0),
            total_revenue=Decimal(row['total_revenue'] or 0),
            last_order_date=row.get('last_order_date'),
        ))

    summaries.sort(key=lambda s: s.supermarket_id)
    summaries.sort(key=lambda s: s.total_revenue, reverse=True)
    return summaries


class SupplierBuyerService:
    """
    Service for the supplier's "my buyers" view

    Handles:
    - Grouping orders by buyer (single SQL round trip)
    - Buyer directory lookup (single query)
    - Placeholder substitution for missing buyers
    """

    def __init__(
        self,
        order_repository: OrderRepository = None,
        supermarket_repository: SupermarketRepository = None
    ):
        self.order_repository = order_repository or OrderRepository()
        self.supermarket_repository = supermarket_repository or SupermarketRepository()

    def buyers_for(self, supplier_id: str) -> List[BuyerSummary]:
        """
        Compute buyer summaries for a supplier

        Args:
            supplier_id: Supplier whose orders are aggregated

        Returns:
            List of BuyerSummary, recomputed on every call
        """
        rows = self.order_repository.aggregate_by_buyer(supplier_id)
        if not rows:
            return []

        directory = self.supermarket_repository.find_by_ids(
            str(row['supermarket_id']) for row in rows
        )

        summaries = build_buyer_summaries(rows, directory)
        logger.info(f"Supplier {supplier_id}: {len(summaries)} buyers aggregated")
        return summaries
