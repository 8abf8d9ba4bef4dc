from typing import Dict, List, Optional
from models.base import CamelModel

class DishStat(CamelModel):
    item_id: str
    name: str
    quantity: int = 0
    revenue: float = 0.0

class RestaurantSummary(CamelModel):
    id: str
    name: str
    address: Optional[str] = None
    is_approved: bool

class RestaurantAnalytics(CamelModel):
    total_orders: int
    total_revenue: float
    pending_orders: int
    top_dishes: List[DishStat]

class RestaurantDashboard(CamelModel):
    restaurant: RestaurantSummary
    analytics: RestaurantAnalytics

class AdminStats(CamelModel):
    total_orders: int
    total_revenue: float
    pending_orders: int
    orders_by_status: Dict[str, int]
