"""
Read access to restaurants and their menus.

Restaurants are owned by the restaurant management surface; the order pipeline
only ever reads them.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional
from models.restaurant import Restaurant
from utils.logger import get_logger

logger = get_logger("Restaurant_Store")

class RestaurantStore(ABC):
    """Abstract base class for restaurant lookups."""

    @abstractmethod
    async def get_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        """Current restaurant, with categories and items, or None."""
        pass

class MongoRestaurantStore(RestaurantStore):
    def __init__(self, collection):
        self.collection = collection

    async def get_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        doc = await self.collection.find_one({"id": restaurant_id}, {"_id": 0})
        if not doc:
            logger.info(f"Restaurant {restaurant_id} not found")
            return None
        return Restaurant.model_validate(doc)

class InMemoryRestaurantStore(RestaurantStore):
    def __init__(self, restaurants: Optional[Dict[str, Restaurant]] = None):
        self._restaurants: Dict[str, Restaurant] = dict(restaurants or {})

    def save(self, restaurant: Restaurant) -> None:
        self._restaurants[restaurant.id] = restaurant.model_copy(deep=True)

    def remove(self, restaurant_id: str) -> None:
        self._restaurants.pop(restaurant_id, None)

    async def get_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        restaurant = self._restaurants.get(restaurant_id)
        return restaurant.model_copy(deep=True) if restaurant else None
