from fastapi import Request
from .connection import DatabaseConnection
from .challenge_store import ChallengeStore
from ..core.errors import InternalError
from ..logger import get_logger

logger = get_logger()

class DatabaseManager:
    """Owns the connection pool and the store built on it for the lifetime of the app"""

    def __init__(self, db_connection: DatabaseConnection = None):
        self.db_connection = db_connection or DatabaseConnection()
        self.store = ChallengeStore(self.db_connection)
        self._initialized = False

    async def initialize(self):
        """Initialize all components"""
        if self._initialized:
            return

        try:
            await self.db_connection.initialize()
            self._initialized = True
            logger.info("Database manager initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database manager: {e}")
            await self.close()
            raise

    async def close(self):
        """Close all connections"""
        if self.db_connection:
            await self.db_connection.close()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

async def get_store(request: Request) -> ChallengeStore:
    """FastAPI dependency handing the app's store to a route"""
    db: DatabaseManager = request.app.state.db
    # Ensure database is initialized
    if not db.initialized:
        try:
            await db.initialize()
        except Exception:
            raise InternalError("Store unavailable")
    return db.store
