"""
Orders API Endpoints
Order history and checkout for supermarkets, incoming orders and status
updates for suppliers

Author: TM3
Date: 2026-10-19
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from marketlink.core.auth import TokenUser, get_current_user, require_supermarket, require_supplier
from marketlink.core.exceptions import OrderNotFoundError, ValidationError
from marketlink.domain.order import OrderCreate, OrderStatusUpdate
from marketlink.repositories.order_repository import OrderRepository
from marketlink.services.order_service import OrderService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("")
async def get_my_orders(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    user: TokenUser = Depends(require_supermarket)
):
    """
    Order history of the current supermarket, newest first
    """
    try:
        repo = OrderRepository()
        orders, total = repo.find_for_supermarket(user.id, limit=limit, offset=offset)

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(orders),
            "data": [order.to_dict() for order in orders]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    user: TokenUser = Depends(require_supermarket)
):
    """
    Place an order from the dashboard cart

    All items must belong to payload.supplier_id.
    """
    try:
        service = OrderService()
        order = service.create_order(user.id, payload)
        return order.to_dict()

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Error creating order for {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error creating order: {str(e)}")


@router.get("/supplier")
async def get_supplier_orders(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by order status"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    user: TokenUser = Depends(require_supplier)
):
    """
    Incoming orders for the current supplier
    """
    try:
        repo = OrderRepository()
        orders, total = repo.find_for_supplier(user.id, status=status_filter, limit=limit, offset=offset)

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(orders),
            "data": [order.to_dict() for order in orders]
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching supplier orders: {str(e)}")


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    user: TokenUser = Depends(get_current_user)
):
    """
    Order detail, visible to its supplier, its supermarket and admins
    """
    try:
        repo = OrderRepository()
        order = repo.find_by_id(order_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching order: {str(e)}")

    if not order or (user.role != "admin" and user.id not in (order.supplier_id, order.supermarket_id)):
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")

    return {
        "status": "success",
        "data": order.to_dict()
    }


@router.patch("/{order_id}/status")
async def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    user: TokenUser = Depends(require_supplier)
):
    """
    Set the status of one of the supplier's orders

    The status is free text (e.g. "processing", "Delivered").
    """
    try:
        service = OrderService()
        order = service.update_status(order_id, user.id, payload.status)

        return {
            "status": "success",
            "data": order.to_dict()
        }

    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating order status: {str(e)}")
