from collections import Counter
from typing import Dict, List
from models.dashboard import AdminStats, DishStat, RestaurantAnalytics, RestaurantDashboard, RestaurantSummary
from models.order import Order, ORDER_STATUSES
from models.restaurant import Restaurant
from services.order_lifecycle import PENDING_STATUSES
from services.revenue import recognized_revenue

TOP_DISHES_LIMIT = 5

def top_dishes(restaurant_id: str, orders: List[Order], limit: int = TOP_DISHES_LIMIT) -> List[DishStat]:
    """Best sellers of one restaurant by quantity, across every order that includes it."""
    stats: Dict[str, DishStat] = {}
    for order in orders:
        for item in order.items:
            if item.restaurant_id != restaurant_id:
                continue
            stat = stats.setdefault(item.item_id, DishStat(item_id=item.item_id, name=item.item_name))
            stat.quantity += item.quantity
            stat.revenue = round(stat.revenue + item.price * item.quantity, 2)
    return sorted(stats.values(), key=lambda s: s.quantity, reverse=True)[:limit]

def restaurant_dashboard(restaurant: Restaurant, orders: List[Order]) -> RestaurantDashboard:
    return RestaurantDashboard(
        restaurant=RestaurantSummary(
            id=restaurant.id,
            name=restaurant.name,
            address=restaurant.address,
            is_approved=restaurant.is_approved,
        ),
        analytics=RestaurantAnalytics(
            total_orders=sum(1 for o in orders if o.status != "cancelled"),
            total_revenue=recognized_revenue(orders),
            pending_orders=sum(1 for o in orders if o.status in PENDING_STATUSES),
            top_dishes=top_dishes(restaurant.id, orders),
        ),
    )

def admin_stats(orders: List[Order]) -> AdminStats:
    by_status = Counter(o.status for o in orders)
    return AdminStats(
        total_orders=len(orders),
        total_revenue=recognized_revenue(orders),
        pending_orders=sum(by_status[s] for s in PENDING_STATUSES),
        orders_by_status={s: by_status.get(s, 0) for s in ORDER_STATUSES},
    )
