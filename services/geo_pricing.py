"""
Distance based delivery economics.

Pure functions, no I/O. Distances are kilometres, fees are currency units.
"""
import math
from typing import NamedTuple, Optional
from models.restaurant import GeoPoint

EARTH_RADIUS_KM = 6371

BASE_DELIVERY_FEE = 20
FREE_DELIVERY_KM = 3
PER_KM_CHARGE = 5

BASE_DELIVERY_MINUTES = 20
MINUTES_PER_KM = 5

# used when either end of the trip has no coordinates
DEFAULT_DELIVERY_FEE = 40
DEFAULT_DELIVERY_TIME = "30-40 mins"
DINE_IN_TIME = "15-20 mins"

class DeliveryQuote(NamedTuple):
    fee: float
    distance: float
    estimated_time: str

def _round_half_up(value: float, places: int = 2) -> float:
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor

def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance between two points, rounded to 2 decimals."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return _round_half_up(EARTH_RADIUS_KM * c)

def delivery_fee(km: float) -> int:
    """Base fee, plus a per-km charge for every started km beyond the free radius."""
    extra_km = max(0, km - FREE_DELIVERY_KM)
    return BASE_DELIVERY_FEE + math.ceil(extra_km) * PER_KM_CHARGE

def estimate_delivery_time(km: float) -> str:
    total = BASE_DELIVERY_MINUTES + math.ceil(km * MINUTES_PER_KM)
    return f"{total - 5}-{total + 10} mins"

def quote_delivery(restaurant_location: Optional[GeoPoint],
                   latitude: Optional[float],
                   longitude: Optional[float]) -> DeliveryQuote:
    """
    Fee, distance and ETA for a delivery from restaurant_location to the customer.
    Falls back to the fixed default when either location is unknown.
    """
    if restaurant_location is None or not restaurant_location.is_set or latitude is None or longitude is None:
        return DeliveryQuote(fee=DEFAULT_DELIVERY_FEE, distance=0, estimated_time=DEFAULT_DELIVERY_TIME)

    km = distance_km(latitude, longitude, restaurant_location.latitude, restaurant_location.longitude)
    return DeliveryQuote(fee=delivery_fee(km), distance=km, estimated_time=estimate_delivery_time(km))
