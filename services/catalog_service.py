import asyncio
from typing import Dict, Iterable, NamedTuple, Optional
from db.restaurant_store import RestaurantStore
from models.restaurant import Restaurant
from utils.logger import get_logger

logger = get_logger("Catalog_Service")

class MenuItemSnapshot(NamedTuple):
    name: str
    price: float
    image: Optional[str]

def find_menu_item(restaurant: Restaurant, item_id: str) -> Optional[MenuItemSnapshot]:
    """Current name/price/image of item_id on the restaurant's menu, or None."""
    for category in restaurant.categories or []:
        for item in category.items:
            if item.id == item_id:
                return MenuItemSnapshot(name=item.name, price=float(item.price), image=item.image)
    return None

async def load_restaurants(store: RestaurantStore, restaurant_ids: Iterable[str]) -> Dict[str, Optional[Restaurant]]:
    """
    Fetch each distinct restaurant once. The fetches run concurrently and all of
    them complete before this returns; missing restaurants map to None.

    If any fetch fails, the others are cancelled and awaited before the error
    is re-raised.
    """
    distinct_ids = list(dict.fromkeys(restaurant_ids))
    tasks = [asyncio.ensure_future(store.get_by_id(rid)) for rid in distinct_ids]
    try:
        results = await asyncio.gather(*tasks)
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.warning(f"Catalog lookup failed; cancelled fetches for {len(distinct_ids)} restaurants")
        raise
    logger.debug(f"Loaded {len(distinct_ids)} restaurants for catalog lookup")
    return dict(zip(distinct_ids, results))
