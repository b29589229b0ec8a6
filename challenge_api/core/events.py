from fastapi import FastAPI
from ..database import DatabaseManager
from ..logger import get_logger
import asyncio

logger = get_logger()

async def startup_event(app: FastAPI):
    """Open the database pool and publish the manager on app.state"""
    db = getattr(app.state, 'db', None)
    if db is None:
        db = DatabaseManager()
        app.state.db = db
    try:
        await db.initialize()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

async def shutdown_event(app: FastAPI):
    """Close database connections"""
    db = getattr(app.state, 'db', None)
    if db is None:
        return
    try:
        # Set a timeout for the shutdown process
        async with asyncio.timeout(5.0):
            await db.close()
            logger.info("Database connections closed")
    except asyncio.TimeoutError:
        logger.warning("Shutdown timed out, abandoning open connections")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")
