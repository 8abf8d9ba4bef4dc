from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
from pymongo.errors import PyMongoError
from core.authorization import require_role
from core.dependencies import CurrentUser, ROLE_RESTAURANT_OWNER, get_order_store, get_restaurant_store
from core.exceptions import ForbiddenError, NotFoundError
from db.order_store import OrderStore
from db.restaurant_store import RestaurantStore
from models.dashboard import RestaurantDashboard
from models.order import Order, OrderStatusUpdate
from services.dashboard_service import restaurant_dashboard
from services.order_lifecycle import get_restaurant_orders, update_status_by_restaurant
from utils.logger import get_logger

logger = get_logger("Restaurant_Owner_Route")

router = APIRouter(prefix="/restaurant-owner", tags=["Restaurant Orders"])

owner_only = require_role(ROLE_RESTAURANT_OWNER)

@router.get("/orders", response_model=List[Order])
async def my_restaurant_orders(
    mode: Optional[str] = Query(None, description="Filter by order mode"),
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by order status"),
    current_user: CurrentUser = Depends(owner_only),
    orders: OrderStore = Depends(get_order_store),
):
    try:
        return await get_restaurant_orders(orders, current_user.restaurant_id, mode=mode, status=status_filter)
    except PyMongoError:
        logger.exception("Database error fetching restaurant orders")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.put("/orders/{order_id}/status", response_model=Order)
async def update_my_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    current_user: CurrentUser = Depends(owner_only),
    orders: OrderStore = Depends(get_order_store),
):
    logger.info(f"Status update {order_id} -> {payload.status} from {current_user.id}")
    try:
        return await update_status_by_restaurant(
            orders,
            restaurant_id=current_user.restaurant_id,
            order_id=order_id,
            new_status=payload.status,
            actor=current_user.id,
            reason=payload.reason,
        )
    except PyMongoError:
        logger.exception(f"Database error updating order {order_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.get("/dashboard", response_model=RestaurantDashboard)
async def dashboard(
    current_user: CurrentUser = Depends(owner_only),
    orders: OrderStore = Depends(get_order_store),
    restaurants: RestaurantStore = Depends(get_restaurant_store),
):
    if not current_user.restaurant_id:
        raise ForbiddenError("Restaurant not linked to your account")
    try:
        restaurant = await restaurants.get_by_id(current_user.restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        restaurant_orders = await orders.find_by_restaurant(restaurant.id)
    except PyMongoError:
        logger.exception("Database error building dashboard")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    return restaurant_dashboard(restaurant, restaurant_orders)
