"""
Products API Endpoints
Catalog listing for the supermarket dashboard

Author: TM3
Date: 2026-10-19
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from marketlink.core.auth import TokenUser, get_current_user
from marketlink.repositories.product_repository import ProductRepository

router = APIRouter()


@router.get("")
async def get_products(
    search: Optional[str] = Query(None, description="Search by name, description or category"),
    category: Optional[str] = Query(None, description="Filter by category"),
    supplier_id: Optional[str] = Query(None, description="Filter by supplier"),
    limit: int = Query(100, ge=1, le=5000),
    offset: int = Query(0, ge=0),
    user: TokenUser = Depends(get_current_user)
):
    """
    Get listed products with optional filters

    Returns products with their owning supplier
    """
    try:
        repo = ProductRepository()

        products, total = repo.find_all(
            search=search,
            category=category,
            supplier_id=supplier_id,
            limit=limit,
            offset=offset
        )

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")
