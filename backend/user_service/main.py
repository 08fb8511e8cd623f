"""
User Service - FastAPI Application

User accounts and the cars attached to them, exposed as RPC-style endpoints.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from user_service.config import get_settings
from user_service.database.connections import get_database, close_connections
from user_service.database.databases.user_db import create_user_indexes
from user_service.routers import health, user

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("user_service")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Initialize the database connection
    - Create indexes

    Shutdown:
    - Close the database connection
    """
    logger.info("Starting up User Service...")

    try:
        db = await get_database()
        await create_user_indexes(db)
        logger.info("Database indexes created")
    except PyMongoError as e:
        logger.warning(f"Database initialization warning: {e}")

    yield

    # Shutdown
    logger.info("Shutting down User Service...")
    await close_connections()
    logger.info("Database connection closed")


# Create FastAPI application
app = FastAPI(
    title="User Service API",
    description="""
## User Service API

User accounts backed by MongoDB.

### Features
- **Users**: Create, update, activate/deactivate, fetch by e-mail or ID
- **Listing**: Filtered, paginated user lists and counts
- **Cars**: A bounded list of cars attached to each user

### Calling convention
Every method is called as `POST /user/<method>` with a JSON body, e.g.:
```
POST /user/fetch {"criteria": "john@example.com", "fields": ["email"]}
```
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(user.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "User Service API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
