from pydantic import Field
from typing import Any, List, Literal, Optional
from datetime import datetime
from models.base import CamelModel
from models.restaurant import GeoPoint

OrderStatus = Literal["received", "preparing", "served", "delivered", "cancelled"]
OrderMode = Literal["delivery", "dinein"]
PaymentMethod = Literal["cod", "card", "upi"]

ORDER_STATUSES = ("received", "preparing", "served", "delivered", "cancelled")
ORDER_MODES = ("delivery", "dinein")
PAYMENT_METHODS = ("cod", "card", "upi")

# --- untrusted input: nothing here is believed until re-resolved against the catalog ---

class CartLineRequest(CamelModel):
    item_id: Optional[str] = None
    restaurant_id: Optional[str] = None
    quantity: Any = None

class ModeFields(CamelModel):
    address: Optional[str] = None
    table_number: Any = None
    latitude: Optional[float] = Field(None, ge=-90, le=90, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, ge=-180, le=180, allow_inf_nan=False)

class OrderSubmission(ModeFields):
    items: List[CartLineRequest] = Field(default_factory=list)
    mode: Optional[str] = None
    payment_method: Optional[str] = None

    def mode_fields(self) -> ModeFields:
        return ModeFields(
            address=self.address,
            table_number=self.table_number,
            latitude=self.latitude,
            longitude=self.longitude,
        )

# --- validated output ---

class OrderItem(CamelModel):
    item_id: str
    item_name: str
    restaurant_id: str
    restaurant_name: str
    price: float
    quantity: int
    image: Optional[str] = None

class PricedOrder(CamelModel):
    order_id: str
    user_id: str
    user_email: Optional[str] = None
    items: List[OrderItem]
    subtotal: float
    delivery_fee: float
    total: float
    mode: OrderMode
    address: Optional[str] = None
    delivery_location: Optional[GeoPoint] = None
    distance: Optional[float] = None
    estimated_delivery_time: Optional[str] = None
    table_number: Optional[int] = None
    payment_method: PaymentMethod = "cod"

class Order(PricedOrder):
    status: OrderStatus = "received"
    created_at: datetime
    updated_at: datetime
    cancelled_by: Optional[str] = None
    cancellation_reason: Optional[str] = None

class CancelRequest(CamelModel):
    reason: Optional[str] = None

class OrderStatusUpdate(CamelModel):
    status: OrderStatus
    reason: Optional[str] = None

class DeleteOrdersResponse(CamelModel):
    deleted_count: int
