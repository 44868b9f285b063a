"""
Database configuration and connection management.
Handles MongoDB connection lifecycle and database operations.
"""
import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from ..errors import error_emitter, log_permission_error, PERMISSION_ERROR_EVENT
from .settings import get_settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages MongoDB database connection and operations."""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        settings = get_settings()
        try:
            logger.info("Connecting to MongoDB at %s", settings.mongodb_url)

            self.client = AsyncIOMotorClient(
                settings.mongodb_url,
                serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
                connectTimeoutMS=settings.connect_timeout_ms,
                socketTimeoutMS=settings.socket_timeout_ms,
                maxPoolSize=settings.max_pool_size,
                minPoolSize=settings.min_pool_size,
                retryWrites=settings.retry_writes,
                directConnection=settings.direct_connection,
            )

            await self.client.admin.command("ping")
            self.database = self.client[settings.database_name]
            logger.info("Connected to MongoDB database %s", settings.database_name)

        except Exception as db_error:
            # The app still starts; routes needing the database answer 503
            logger.warning("MongoDB connection failed: %s", db_error)
            self.database = None

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        try:
            if self.client is not None:
                self.client.close()
                logger.info("MongoDB connection closed")
        except Exception as e:
            logger.error("Error during database disconnect: %s", e)
        finally:
            self.client = None
            self.database = None

    async def create_indexes(self) -> None:
        """Create the indexes the storefront queries rely on."""
        if self.database is None:
            logger.warning("Database not connected, skipping index creation")
            return

        try:
            db = self.database

            await db.products.create_index("slug", unique=True)
            await db.products.create_index("category")
            await db.products.create_index([("created_at", DESCENDING)])
            await db.products.create_index([("sales", DESCENDING)])

            await db.orders.create_index("user_id")
            await db.orders.create_index("status")
            await db.orders.create_index([("created_at", DESCENDING)])
            await db.orders.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

            await db.cart_items.create_index("user_id")
            await db.wishlist_items.create_index(
                [("user_id", ASCENDING), ("product_id", ASCENDING)], unique=True
            )
            await db.users.create_index("email", unique=True)

            logger.info("Database indexes created successfully")

        except Exception as index_error:
            logger.warning("Failed to create indexes: %s", index_error)

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get database instance."""
        if self.database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.database

    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self.database is not None


# Global database manager instance
db_manager = DatabaseManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for database connection."""
    logger.info("Starting up application...")
    error_emitter.on(PERMISSION_ERROR_EVENT, log_permission_error)
    await db_manager.connect()
    await db_manager.create_indexes()
    app.state.db_manager = db_manager

    yield

    await db_manager.disconnect()
    error_emitter.off(PERMISSION_ERROR_EVENT, log_permission_error)


async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency to get database instance."""
    if not db_manager.is_connected():
        raise HTTPException(
            status_code=503,
            detail="Database connection not available. Please check your MongoDB connection."
        )
    return db_manager.get_database()


def get_database_manager() -> DatabaseManager:
    """Get database manager instance."""
    return db_manager
