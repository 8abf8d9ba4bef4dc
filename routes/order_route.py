from fastapi import APIRouter, Body, Depends, HTTPException, status
from typing import List, Optional
from pymongo.errors import PyMongoError
from core.authorization import require_role
from core.dependencies import CurrentUser, ROLE_CUSTOMER, get_order_store, get_restaurant_store
from db.order_store import OrderStore
from db.restaurant_store import RestaurantStore
from models.order import CancelRequest, Order, OrderSubmission
from services.order_lifecycle import cancel_customer_order, get_customer_order, get_customer_orders, place_order
from services.order_validator import validate_and_price_order
from utils.logger import get_logger

logger = get_logger("Order_Route")

router = APIRouter(prefix="/orders", tags=["Orders"])

customer_only = require_role(ROLE_CUSTOMER)

@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(
    submission: OrderSubmission,
    current_user: CurrentUser = Depends(customer_only),
    orders: OrderStore = Depends(get_order_store),
    restaurants: RestaurantStore = Depends(get_restaurant_store),
):
    """Validate, price and place an order"""
    logger.info(f"Received order submission from {current_user.id} with {len(submission.items)} lines")
    try:
        priced = await validate_and_price_order(
            restaurants,
            customer_id=current_user.id,
            raw_items=submission.items,
            mode=submission.mode,
            mode_fields=submission.mode_fields(),
            payment_method=submission.payment_method,
            user_email=current_user.email,
        )
        return await place_order(orders, priced)
    except PyMongoError:
        logger.exception("Database error creating order")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.get("/my-orders", response_model=List[Order])
async def my_orders(current_user: CurrentUser = Depends(customer_only),
                    orders: OrderStore = Depends(get_order_store)):
    """All orders of the caller, newest first"""
    try:
        return await get_customer_orders(orders, current_user.id)
    except PyMongoError:
        logger.exception("Database error fetching orders")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.get("/{order_id}", response_model=Order)
async def my_order(order_id: str,
                   current_user: CurrentUser = Depends(customer_only),
                   orders: OrderStore = Depends(get_order_store)):
    try:
        return await get_customer_order(orders, current_user.id, order_id)
    except PyMongoError:
        logger.exception(f"Database error fetching order {order_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.patch("/{order_id}/cancel", response_model=Order)
async def cancel_my_order(order_id: str,
                          payload: Optional[CancelRequest] = Body(None),
                          current_user: CurrentUser = Depends(customer_only),
                          orders: OrderStore = Depends(get_order_store)):
    logger.info(f"Cancellation requested for {order_id} by {current_user.id}")
    try:
        return await cancel_customer_order(orders, current_user.id, order_id, reason=payload.reason if payload else None)
    except PyMongoError:
        logger.exception(f"Database error cancelling order {order_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
