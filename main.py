from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from settings.config import settings
from core.exceptions import global_exception_handler, validation_exception_handler
from utils.logger import get_logger
from routes import admin_routes, location_routes, order_route, restaurant_owner_routes

logger = get_logger("main")

app = FastAPI(title="QuickServe Order Service API", version="1.0.0")

@app.get("/")
async def health_check():
    logger.info("Health check is successful")
    return {
        "status": "ok",
        "app": settings.PROJECT_NAME,
        "message": "FastAPI is running"
    }

@app.on_event("startup")
async def startup_event():
    if settings.STORAGE_BACKEND == "mongo":
        from db.db_operation import create_indexes, mongo_conn
        await mongo_conn.connect()
        await create_indexes()
    else:
        logger.info(f"Using {settings.STORAGE_BACKEND} storage backend")

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)
app.include_router(order_route.router)
app.include_router(restaurant_owner_routes.router)
app.include_router(admin_routes.router)
app.include_router(location_routes.router)
