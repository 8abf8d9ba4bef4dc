# models/restaurant.py
from pydantic import Field
from typing import Optional, List
from models.base import CamelModel

class GeoPoint(CamelModel):
    """GeoJSON point; coordinates are [longitude, latitude]."""
    type: str = "Point"
    coordinates: List[float] = Field(default_factory=lambda: [0.0, 0.0])

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    @property
    def is_set(self) -> bool:
        # [0, 0] is the "no location" sentinel
        return len(self.coordinates) == 2 and any(c != 0 for c in self.coordinates)

class MenuItem(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    image: Optional[str] = None
    vegetarian: bool = False

class Category(CamelModel):
    name: str
    items: List[MenuItem] = Field(default_factory=list)

class Restaurant(CamelModel):
    id: str
    name: str
    address: Optional[str] = None
    location: Optional[GeoPoint] = None
    is_approved: bool = False
    is_active: bool = True
    categories: List[Category] = Field(default_factory=list)
    owner_id: Optional[str] = None

    @property
    def has_location(self) -> bool:
        return self.location is not None and self.location.is_set
