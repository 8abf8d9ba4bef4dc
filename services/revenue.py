from typing import Iterable
from models.order import Order

FULFILLED_STATUSES = ("served", "delivered")

def is_revenue_recognized(order: Order) -> bool:
    """
    Cancelled orders never count. Cash-on-delivery counts only once fulfilled;
    prepaid methods count as soon as the order is live.
    """
    if order.status == "cancelled":
        return False
    if order.payment_method == "cod":
        return order.status in FULFILLED_STATUSES
    return True

def recognized_revenue(orders: Iterable[Order]) -> float:
    return round(sum(o.total for o in orders if is_revenue_recognized(o)), 2)
