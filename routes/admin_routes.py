# routes/admin_routes.py
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from pymongo.errors import PyMongoError
from core.authorization import require_role
from core.dependencies import CurrentUser, ROLE_ADMIN, get_order_store
from db.order_store import OrderStore
from models.dashboard import AdminStats
from models.order import DeleteOrdersResponse, Order, OrderStatusUpdate
from services.dashboard_service import admin_stats
from services.order_lifecycle import delete_all_orders, get_all_orders, update_status_by_admin
from utils.logger import get_logger

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = get_logger("Admin_Route")

admin_only = require_role(ROLE_ADMIN)

@router.get("/orders", response_model=List[Order], dependencies=[Depends(admin_only)])
async def list_all_orders(orders: OrderStore = Depends(get_order_store)):
    try:
        return await get_all_orders(orders)
    except PyMongoError:
        logger.exception("Database error listing orders")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.patch("/orders/{order_id}/status", response_model=Order)
async def api_update_order_status(order_id: str, payload: OrderStatusUpdate,
                                  current_admin: CurrentUser = Depends(admin_only),
                                  orders: OrderStore = Depends(get_order_store)):
    try:
        return await update_status_by_admin(orders, order_id, payload.status, actor=current_admin.id,
                                            reason=payload.reason)
    except PyMongoError:
        logger.exception(f"Database error updating order {order_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.delete("/orders", response_model=DeleteOrdersResponse)
async def api_delete_all_orders(current_admin: CurrentUser = Depends(admin_only),
                                orders: OrderStore = Depends(get_order_store)):
    """Administrative reset: removes every order. Irreversible."""
    try:
        deleted = await delete_all_orders(orders, actor=current_admin.id)
    except PyMongoError:
        logger.exception("Database error deleting orders")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    return DeleteOrdersResponse(deleted_count=deleted)

@router.get("/stats", response_model=AdminStats, dependencies=[Depends(admin_only)])
async def api_stats(orders: OrderStore = Depends(get_order_store)):
    try:
        all_orders = await get_all_orders(orders)
    except PyMongoError:
        logger.exception("Database error building stats")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    return admin_stats(all_orders)
