"""
Order status lifecycle and the customer / restaurant-owner / admin views over it.

received -> preparing -> served | delivered, with cancelled reachable from
received or preparing. Status writes are compare-and-swap against the status
read just before the check.
"""
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import status as http_status
from core.exceptions import DuplicateOrderIdError, ForbiddenError, NotFoundError, OrderConflictError, OrderValidationError
from db.order_store import OrderStore
from models.order import Order, PricedOrder, ORDER_MODES, ORDER_STATUSES
from services.order_validator import generate_order_id
from utils.logger import get_logger

logger = get_logger("Order_Lifecycle")

ALLOWED_STATUS_TRANSITIONS = {
    "received": ["preparing", "cancelled"],
    "preparing": ["served", "delivered", "cancelled"],
    "served": [],
    "delivered": [],
    "cancelled": []
}
CUSTOMER_CANCELLABLE_STATUSES = ["received", "preparing"]
PENDING_STATUSES = ["received", "preparing"]

MAX_INSERT_ATTEMPTS = 3

def can_transition(current_status: str, new_status: str) -> bool:
    return new_status in ALLOWED_STATUS_TRANSITIONS.get(current_status, [])

async def place_order(store: OrderStore, priced: PricedOrder) -> Order:
    """Persist a priced order in its initial status."""
    now = datetime.now(timezone.utc)
    order = Order(**priced.model_dump(), status="received", created_at=now, updated_at=now)
    for attempt in range(1, MAX_INSERT_ATTEMPTS + 1):
        try:
            await store.insert(order)
            logger.info(f"Order {order.order_id} placed by {order.user_id}, total {order.total}")
            return order
        except DuplicateOrderIdError:
            logger.warning(f"Order id {order.order_id} collided (attempt {attempt}), regenerating")
            order = order.model_copy(update={"order_id": generate_order_id()})
    raise RuntimeError(f"Could not allocate a unique order id after {MAX_INSERT_ATTEMPTS} attempts")

async def _swap_status(store: OrderStore, order: Order, new_status: str, actor: str,
                       action: str, reason: Optional[str] = None, extra: Optional[dict] = None) -> Order:
    updated = await store.update_status(order.order_id, order.status, new_status, extra)
    if updated is None:
        logger.warning(f"Concurrent status change detected on {order.order_id} ({action} by {actor})")
        raise OrderConflictError(
            "Order was modified by another request, reload and try again",
            status_code=http_status.HTTP_409_CONFLICT
        )
    await store.log_status_change({
        "actor": actor,
        "action": action,
        "resource_type": "order",
        "order_id": order.order_id,
        "before": {"status": order.status},
        "after": {"status": new_status},
        "reason": reason,
        "timestamp": datetime.now(timezone.utc)
    })
    logger.info(f"Order {order.order_id} status {order.status} -> {new_status} by {actor}")
    return updated

# ---- customer view ----

async def get_customer_orders(store: OrderStore, customer_id: str) -> List[Order]:
    orders = await store.find_by_user(customer_id)
    logger.info(f"Fetched {len(orders)} orders for customer {customer_id}")
    return orders

async def get_customer_order(store: OrderStore, customer_id: str, order_id: str) -> Order:
    order = await store.find_by_order_id(order_id, user_id=customer_id)
    if order is None:
        logger.warning(f"Order {order_id} not found or not owned by {customer_id}")
        raise NotFoundError("Order not found")
    return order

async def cancel_customer_order(store: OrderStore, customer_id: str, order_id: str,
                                reason: Optional[str] = None) -> Order:
    order = await get_customer_order(store, customer_id, order_id)

    if order.status == "cancelled":
        raise OrderConflictError("Order is already cancelled")
    if order.status not in CUSTOMER_CANCELLABLE_STATUSES:
        raise OrderConflictError(f"Order cannot be cancelled once it has been {order.status}")

    extra = {"cancelled_by": "customer"}
    if reason:
        extra["cancellation_reason"] = reason
    return await _swap_status(store, order, "cancelled", customer_id, "cancel_order", reason, extra)

# ---- restaurant owner view ----

def _check_filters(mode: Optional[str], status: Optional[str]) -> None:
    if mode and mode not in ORDER_MODES:
        raise OrderValidationError(f"Invalid mode filter '{mode}'")
    if status and status not in ORDER_STATUSES:
        raise OrderValidationError(f"Invalid status filter '{status}'")

async def get_restaurant_orders(store: OrderStore, restaurant_id: Optional[str], mode: Optional[str] = None,
                                status: Optional[str] = None) -> List[Order]:
    if not restaurant_id:
        raise ForbiddenError("Restaurant not linked to your account")
    _check_filters(mode, status)
    orders = await store.find_by_restaurant(restaurant_id, mode=mode, status=status)
    logger.info(f"Fetched {len(orders)} orders for restaurant {restaurant_id}")
    return orders

async def update_status_by_restaurant(store: OrderStore, restaurant_id: Optional[str], order_id: str,
                                      new_status: str, actor: str, reason: Optional[str] = None) -> Order:
    if not restaurant_id:
        logger.warning(f"{actor} has no linked restaurant")
        raise ForbiddenError("Restaurant not linked to your account")

    order = await store.find_by_order_id(order_id)
    if order is None:
        raise NotFoundError("Order not found")

    if not any(item.restaurant_id == restaurant_id for item in order.items):
        logger.warning(f"{actor} (restaurant {restaurant_id}) tried to update order {order_id}")
        raise ForbiddenError("Unauthorized to update this order")

    if order.status == new_status:
        return order
    if not can_transition(order.status, new_status):
        raise OrderValidationError(f"Invalid status transition from '{order.status}' to '{new_status}'")

    extra = {"cancelled_by": "restaurant"} if new_status == "cancelled" else None
    if extra and reason:
        extra["cancellation_reason"] = reason
    return await _swap_status(store, order, new_status, actor, "update_order_status", reason, extra)

# ---- admin view ----

async def get_all_orders(store: OrderStore) -> List[Order]:
    return await store.find_all()

async def update_status_by_admin(store: OrderStore, order_id: str, new_status: str, actor: str,
                                 reason: Optional[str] = None) -> Order:
    """Admins may set any status, e.g. to correct a mistake."""
    if new_status not in ORDER_STATUSES:
        raise OrderValidationError(f"Invalid status '{new_status}'")
    order = await store.find_by_order_id(order_id)
    if order is None:
        raise NotFoundError("Order not found")
    if order.status == new_status:
        return order

    extra = {"cancelled_by": "admin"} if new_status == "cancelled" else None
    return await _swap_status(store, order, new_status, actor, "admin_update_order_status", reason, extra)

async def delete_all_orders(store: OrderStore, actor: str) -> int:
    deleted = await store.delete_all()
    logger.warning(f"All orders deleted by {actor}: {deleted} removed")
    return deleted
