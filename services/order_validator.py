"""
Turns an untrusted cart submission into a priced, normalised order.

Every line is re-resolved against the live catalog; prices and names sent by
the client are never read. Nothing is persisted here.
"""
import math
import random
import time
from typing import Any, Dict, List, Optional, Tuple
from core.exceptions import OrderValidationError
from db.restaurant_store import RestaurantStore
from models.order import CartLineRequest, ModeFields, OrderItem, PricedOrder, ORDER_MODES, PAYMENT_METHODS
from models.restaurant import GeoPoint
from services.catalog_service import find_menu_item, load_restaurants
from services.geo_pricing import DINE_IN_TIME, quote_delivery
from utils.logger import get_logger

logger = get_logger("Order_Validator")

MAX_LINE_QUANTITY = 1000
MAX_TABLE_NUMBER = 10000

def generate_order_id() -> str:
    """ORD-<millisecond epoch>-<0..999>; readable, not cryptographically unique."""
    return f"ORD-{int(time.time() * 1000)}-{random.randint(0, 999)}"

def _parse_quantity(value: Any, upper: int = MAX_LINE_QUANTITY) -> Optional[int]:
    """Positive whole number no larger than upper, or None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and (not math.isfinite(value) or not value.is_integer()):
        return None
    if value <= 0 or value > upper:
        return None
    return int(value)

def _check_lines(raw_items: List[CartLineRequest]) -> List[Tuple[str, str, int]]:
    if not raw_items:
        raise OrderValidationError("Order must include at least one item")
    lines = []
    for position, raw in enumerate(raw_items, start=1):
        if not raw.item_id or not raw.restaurant_id:
            raise OrderValidationError(f"Item {position} is missing itemId or restaurantId")
        quantity = _parse_quantity(raw.quantity)
        if quantity is None:
            raise OrderValidationError(f"Item {position} has an invalid quantity: must be a positive whole number of at most {MAX_LINE_QUANTITY}")
        lines.append((raw.item_id, raw.restaurant_id, quantity))
    return lines

def _check_payment_method(payment_method: Optional[str]) -> str:
    if payment_method is None:
        return "cod"
    method = str(payment_method).strip().lower()
    if method not in PAYMENT_METHODS:
        raise OrderValidationError(
            f"Invalid payment method '{payment_method}'. Allowed: {', '.join(PAYMENT_METHODS)}"
        )
    return method

def _check_mode(mode: Optional[str], fields: ModeFields) -> Tuple[str, Optional[str], Optional[int]]:
    mode = (mode or "delivery").strip().lower()
    if mode not in ORDER_MODES:
        raise OrderValidationError(f"Invalid order mode '{mode}'. Allowed: {', '.join(ORDER_MODES)}")

    if mode == "delivery":
        address = (fields.address or "").strip()
        if not address:
            raise OrderValidationError("Delivery address is required for delivery orders")
        return mode, address, None

    if fields.table_number is None or fields.table_number == "":
        raise OrderValidationError("Table number is required for dine-in orders")
    table_number = _parse_quantity(fields.table_number, upper=MAX_TABLE_NUMBER)
    if table_number is None:
        raise OrderValidationError(f"Table number must be a positive whole number of at most {MAX_TABLE_NUMBER}")
    return mode, None, table_number

async def validate_and_price_order(
    restaurant_store: RestaurantStore,
    customer_id: str,
    raw_items: List[CartLineRequest],
    mode: Optional[str],
    mode_fields: ModeFields,
    payment_method: Optional[str] = None,
    user_email: Optional[str] = None,
) -> PricedOrder:
    """
    Validate a cart and compute its price.

    Raises OrderValidationError for anything the caller can correct; store
    failures propagate untouched.
    """
    lines = _check_lines(raw_items)
    method = _check_payment_method(payment_method)
    mode, address, table_number = _check_mode(mode, mode_fields)

    restaurants = await load_restaurants(restaurant_store, (rid for _, rid, _ in lines))

    merged: Dict[Tuple[str, str], OrderItem] = {}
    for item_id, restaurant_id, quantity in lines:
        restaurant = restaurants.get(restaurant_id)
        if restaurant is None:
            logger.warning(f"Order rejected for {customer_id}: restaurant {restaurant_id} not found")
            raise OrderValidationError(f"Restaurant not found: {restaurant_id}")
        if not restaurant.is_approved or not restaurant.is_active:
            logger.warning(f"Order rejected for {customer_id}: restaurant {restaurant_id} not accepting orders")
            raise OrderValidationError(f"Restaurant {restaurant.name} is not accepting orders")

        snapshot = find_menu_item(restaurant, item_id)
        if snapshot is None:
            logger.warning(f"Order rejected for {customer_id}: item {item_id} not on menu of {restaurant_id}")
            raise OrderValidationError(f"Item {item_id} is not available for restaurant {restaurant.name}")

        key = (restaurant_id, item_id)
        if key in merged:
            merged[key].quantity += quantity
            continue
        merged[key] = OrderItem(
            item_id=item_id,
            item_name=snapshot.name,
            restaurant_id=restaurant_id,
            restaurant_name=restaurant.name,
            price=snapshot.price,
            quantity=quantity,
            image=snapshot.image,
        )

    items = list(merged.values())
    subtotal = round(sum(item.price * item.quantity for item in items), 2)

    delivery_location = None
    distance = None
    if mode == "delivery":
        # one reference restaurant per order: the first validated line's
        reference = restaurants[items[0].restaurant_id]
        quote = quote_delivery(reference.location, mode_fields.latitude, mode_fields.longitude)
        fee, distance, eta = quote.fee, quote.distance, quote.estimated_time
        if mode_fields.latitude is not None and mode_fields.longitude is not None:
            delivery_location = GeoPoint(coordinates=[mode_fields.longitude, mode_fields.latitude])
    else:
        fee, eta = 0, DINE_IN_TIME

    priced = PricedOrder(
        order_id=generate_order_id(),
        user_id=customer_id,
        user_email=user_email,
        items=items,
        subtotal=subtotal,
        delivery_fee=fee,
        total=round(subtotal + fee, 2),
        mode=mode,
        address=address,
        delivery_location=delivery_location,
        distance=distance,
        estimated_delivery_time=eta,
        table_number=table_number,
        payment_method=method,
    )
    logger.info(
        f"Priced order {priced.order_id} for {customer_id}: {len(items)} lines, "
        f"subtotal {priced.subtotal}, fee {priced.delivery_fee}, total {priced.total}"
    )
    return priced
