from pydantic import Field
from typing import Optional
from models.base import CamelModel

class DeliveryQuoteRequest(CamelModel):
    restaurant_id: str = Field(..., min_length=1)
    user_latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    user_longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

class DeliveryQuoteResponse(CamelModel):
    distance: float
    delivery_fee: float
    estimated_time: str
    has_location: bool
    restaurant_name: str
    restaurant_address: Optional[str] = None
