"""
Persistence of order records keyed by their generated order id.

Orders are a historical record: the items embedded in each document are the
snapshot taken at creation, so store queries never consult restaurants.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError
from core.exceptions import DuplicateOrderIdError
from models.order import Order
from utils.logger import get_logger

logger = get_logger("Order_Store")

class OrderStore(ABC):
    """Abstract base class for order persistence."""

    @abstractmethod
    async def insert(self, order: Order) -> Order:
        """Persist a new order. Raises DuplicateOrderIdError on id collision."""
        pass

    @abstractmethod
    async def find_by_order_id(self, order_id: str, user_id: Optional[str] = None) -> Optional[Order]:
        """Order by id, optionally only if it belongs to user_id."""
        pass

    @abstractmethod
    async def find_by_user(self, user_id: str) -> List[Order]:
        """All orders of a customer, newest first."""
        pass

    @abstractmethod
    async def find_by_restaurant(self, restaurant_id: str, mode: Optional[str] = None,
                                 status: Optional[str] = None) -> List[Order]:
        """Orders with at least one line item from restaurant_id, newest first."""
        pass

    @abstractmethod
    async def find_all(self) -> List[Order]:
        """Every order, newest first."""
        pass

    @abstractmethod
    async def update_status(self, order_id: str, expected_status: str, new_status: str,
                            extra: Optional[Dict[str, Any]] = None) -> Optional[Order]:
        """
        Compare-and-swap the status of an order.
        Returns the updated order, or None when the order is gone or its status
        is no longer expected_status.
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every order; returns the number removed."""
        pass

    @abstractmethod
    async def log_status_change(self, entry: Dict[str, Any]) -> None:
        """Append an audit entry for a status change."""
        pass

class MongoOrderStore(OrderStore):
    def __init__(self, orders_collection, audit_collection):
        self.orders = orders_collection
        self.audit_logs = audit_collection

    async def insert(self, order: Order) -> Order:
        doc = order.model_dump()
        try:
            await self.orders.insert_one(doc)
        except DuplicateKeyError:
            logger.warning(f"Order id collision on insert: {order.order_id}")
            raise DuplicateOrderIdError(order.order_id)
        return order

    async def find_by_order_id(self, order_id: str, user_id: Optional[str] = None) -> Optional[Order]:
        query = {"order_id": order_id}
        if user_id is not None:
            query["user_id"] = user_id
        doc = await self.orders.find_one(query, {"_id": 0})
        return Order.model_validate(doc) if doc else None

    async def _find_many(self, query: dict) -> List[Order]:
        cursor = self.orders.find(query, {"_id": 0}).sort("created_at", DESCENDING)
        docs = await cursor.to_list(length=None)
        return [Order.model_validate(d) for d in docs]

    async def find_by_user(self, user_id: str) -> List[Order]:
        return await self._find_many({"user_id": user_id})

    async def find_by_restaurant(self, restaurant_id: str, mode: Optional[str] = None,
                                 status: Optional[str] = None) -> List[Order]:
        query = {"items.restaurant_id": restaurant_id}
        if mode:
            query["mode"] = mode
        if status:
            query["status"] = status
        return await self._find_many(query)

    async def find_all(self) -> List[Order]:
        return await self._find_many({})

    async def update_status(self, order_id: str, expected_status: str, new_status: str,
                            extra: Optional[Dict[str, Any]] = None) -> Optional[Order]:
        update_doc = {"status": new_status, "updated_at": datetime.now(timezone.utc)}
        update_doc.update(extra or {})
        doc = await self.orders.find_one_and_update(
            {"order_id": order_id, "status": expected_status},
            {"$set": update_doc},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )
        return Order.model_validate(doc) if doc else None

    async def delete_all(self) -> int:
        result = await self.orders.delete_many({})
        return result.deleted_count

    async def log_status_change(self, entry: Dict[str, Any]) -> None:
        await self.audit_logs.insert_one(dict(entry))

class InMemoryOrderStore(OrderStore):
    """Process-local store for development and tests."""

    def __init__(self):
        self._orders: Dict[str, Order] = {}
        self.audit_log: List[Dict[str, Any]] = []

    async def insert(self, order: Order) -> Order:
        if order.order_id in self._orders:
            raise DuplicateOrderIdError(order.order_id)
        self._orders[order.order_id] = order.model_copy(deep=True)
        return order

    async def find_by_order_id(self, order_id: str, user_id: Optional[str] = None) -> Optional[Order]:
        order = self._orders.get(order_id)
        if order is None or (user_id is not None and order.user_id != user_id):
            return None
        return order.model_copy(deep=True)

    def _newest_first(self, orders) -> List[Order]:
        # insertion order breaks ties between identical timestamps
        ordered = sorted(reversed(list(orders)), key=lambda o: o.created_at, reverse=True)
        return [o.model_copy(deep=True) for o in ordered]

    async def find_by_user(self, user_id: str) -> List[Order]:
        return self._newest_first(o for o in self._orders.values() if o.user_id == user_id)

    async def find_by_restaurant(self, restaurant_id: str, mode: Optional[str] = None,
                                 status: Optional[str] = None) -> List[Order]:
        matches = (
            o for o in self._orders.values()
            if any(item.restaurant_id == restaurant_id for item in o.items)
            and (not mode or o.mode == mode)
            and (not status or o.status == status)
        )
        return self._newest_first(matches)

    async def find_all(self) -> List[Order]:
        return self._newest_first(self._orders.values())

    async def update_status(self, order_id: str, expected_status: str, new_status: str,
                            extra: Optional[Dict[str, Any]] = None) -> Optional[Order]:
        order = self._orders.get(order_id)
        if order is None or order.status != expected_status:
            return None
        update_doc = {"status": new_status, "updated_at": datetime.now(timezone.utc)}
        update_doc.update(extra or {})
        updated = order.model_copy(update=update_doc, deep=True)
        self._orders[order_id] = updated
        return updated.model_copy(deep=True)

    async def delete_all(self) -> int:
        count = len(self._orders)
        self._orders.clear()
        return count

    async def log_status_change(self, entry: Dict[str, Any]) -> None:
        self.audit_log.append(dict(entry))
