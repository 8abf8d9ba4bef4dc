from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from settings.config import settings
from utils.logger import get_logger

logger = get_logger("DB_OPERATION")

async def create_indexes():
    orders_collection = mongo_conn.orders_collection
    await orders_collection.create_index("order_id", unique=True)
    await orders_collection.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    await orders_collection.create_index("items.restaurant_id")
    await orders_collection.create_index("status")
    await mongo_conn.restaurants_collection.create_index("id", unique=True)
    logger.info("Indexes created")

class MongoConnection:
    def __init__(self):
        logger.info("Initializing MongoDB Connection")
        self.client = AsyncIOMotorClient(
            settings.MONGO_URI,
            tz_aware=True,
            timeoutMS=settings.STORE_TIMEOUT_SECONDS * 1000,
        )
        self.db = self.client[settings.DB_NAME]
        self.orders_collection = self.db["orders"]
        self.restaurants_collection = self.db["restaurants"]
        self.audit_logs = self.db["audit_logs"]

    async def connect(self):
        try:
            # Force an actual connection & authentication check
            await self.db.command("ping")
            logger.info("Successfully connected to MongoDB and authenticated.")
            logger.info(f"Using Database: {settings.DB_NAME}")
            logger.info(f"Collections ready: {self.orders_collection.name}, {self.restaurants_collection.name}")
        except Exception as e:
            logger.error(f"Could not connect to MongoDB: {e}")
            raise e

# Create the instance
mongo_conn = MongoConnection()
