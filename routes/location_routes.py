from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import PyMongoError
from core.dependencies import CurrentUser, get_current_user, get_restaurant_store
from core.exceptions import NotFoundError
from db.restaurant_store import RestaurantStore
from models.location import DeliveryQuoteRequest, DeliveryQuoteResponse
from services.geo_pricing import quote_delivery
from utils.logger import get_logger

logger = get_logger("Location_Route")

router = APIRouter(prefix="/location", tags=["Location"])

@router.post("/calculate", response_model=DeliveryQuoteResponse)
async def calculate_delivery(
    payload: DeliveryQuoteRequest,
    current_user: CurrentUser = Depends(get_current_user),
    restaurants: RestaurantStore = Depends(get_restaurant_store),
):
    """Preview the delivery fee, distance and ETA from a restaurant to the caller's coordinates"""
    try:
        restaurant = await restaurants.get_by_id(payload.restaurant_id)
    except PyMongoError:
        logger.exception(f"Database error loading restaurant {payload.restaurant_id}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    if restaurant is None:
        raise NotFoundError("Restaurant not found")

    quote = quote_delivery(restaurant.location, payload.user_latitude, payload.user_longitude)
    logger.info(
        f"Delivery quote for {current_user.id} from {restaurant.id}: "
        f"{quote.distance} km, fee {quote.fee}, {quote.estimated_time}"
    )
    return DeliveryQuoteResponse(
        distance=quote.distance,
        delivery_fee=quote.fee,
        estimated_time=quote.estimated_time,
        has_location=restaurant.has_location,
        restaurant_name=restaurant.name,
        restaurant_address=restaurant.address,
    )
