from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from typing import Optional
from pydantic import BaseModel
from db.order_store import InMemoryOrderStore, MongoOrderStore, OrderStore
from db.restaurant_store import InMemoryRestaurantStore, MongoRestaurantStore, RestaurantStore
from settings.config import settings
from utils.jwt_handler import decode_access_token
from utils.logger import get_logger

logger = get_logger("Dependencies")

# tokens are issued by the auth service; this service only verifies them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

ROLE_CUSTOMER = "customer"
ROLE_RESTAURANT_OWNER = "restaurant_owner"
ROLE_ADMIN = "admin"

class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None
    role: str = ROLE_CUSTOMER
    # restaurant the account is linked to, owners only
    restaurant_id: Optional[str] = None

async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """
    Decode the bearer token into the caller's identity, role and linked restaurant.
    """
    try:
        payload = decode_access_token(token)
    except ValueError:
        logger.error("JWT Error: Invalid token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    user_id = payload.get("sub")
    if user_id is None:
        logger.debug("Subject not found in token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: no subject found"
        )
    current_user = CurrentUser(
        id=str(user_id),
        email=payload.get("email"),
        role=payload.get("role") or ROLE_CUSTOMER,
        restaurant_id=payload.get("restaurant_id"),
    )
    logger.debug(f"Current user resolved: {current_user.id} ({current_user.role})")
    return current_user

_memory_order_store: Optional[InMemoryOrderStore] = None
_memory_restaurant_store: Optional[InMemoryRestaurantStore] = None

def get_order_store() -> OrderStore:
    global _memory_order_store
    if settings.STORAGE_BACKEND == "memory":
        if _memory_order_store is None:
            _memory_order_store = InMemoryOrderStore()
        return _memory_order_store
    from db.db_operation import mongo_conn
    return MongoOrderStore(mongo_conn.orders_collection, mongo_conn.audit_logs)

def get_restaurant_store() -> RestaurantStore:
    global _memory_restaurant_store
    if settings.STORAGE_BACKEND == "memory":
        if _memory_restaurant_store is None:
            _memory_restaurant_store = InMemoryRestaurantStore()
        return _memory_restaurant_store
    from db.db_operation import mongo_conn
    return MongoRestaurantStore(mongo_conn.restaurants_collection)
