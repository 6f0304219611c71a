"""
Supermarket API Endpoints
- Buyer aggregation for suppliers (/api/supermarkets/buyers)
- Current supermarket profile (/api/supermarket/me)

Author: TM3
Date: 2026-10-19
"""
from fastapi import APIRouter, Depends, HTTPException

from marketlink.core.auth import TokenUser, require_supermarket, require_supplier
from marketlink.repositories.supermarket_repository import SupermarketRepository
from marketlink.services.buyer_service import SupplierBuyerService

buyers_router = APIRouter(prefix="/api/supermarkets", tags=["Supermarkets"])
profile_router = APIRouter(prefix="/api/supermarket", tags=["Supermarkets"])


@buyers_router.get("/buyers")
async def get_supplier_buyers(
    user: TokenUser = Depends(require_supplier)
):
    """
    Buyers of the current supplier with order count, revenue and last order date

    Sorted by revenue (highest first). Recomputed on every request.
    """
    try:
        service = SupplierBuyerService()
        summaries = service.buyers_for(user.id)
        return [summary.to_dict() for summary in summaries]

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error aggregating buyers: {str(e)}")


@profile_router.get("/me")
async def get_my_supermarket(
    user: TokenUser = Depends(require_supermarket)
):
    """Directory record of the current supermarket"""
    try:
        repo = SupermarketRepository()
        supermarket = repo.find_by_id(user.id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching supermarket: {str(e)}")

    if not supermarket:
        raise HTTPException(status_code=404, detail="Supermarket profile not found")

    data = supermarket.model_dump(mode="json")
    data["email"] = supermarket.contact_email or user.email
    data["role"] = user.role
    return data
