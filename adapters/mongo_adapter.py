"""MongoDB adapter for users and meal plans.
"""

from typing import Optional
import logging
import time

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.exceptions import StoreUnavailableError

logger = logging.getLogger("mealplan.mongo")

USERS = "users"
MEAL_PLANS = "meal_plans"


class MongoStore:
    """Connection handle shared by request handlers through ``app.state``."""

    def __init__(
        self,
        uri: str,
        db_name: str = "mealplan",
        timeout_ms: int = 5000,
        reconnect_interval: float = 5.0,
    ):
        self.uri = uri
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self.reconnect_interval = reconnect_interval
        self._last_attempt: Optional[float] = None
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    # ------------------ Connection ------------------
    def connect(self) -> bool:
        """Connect, ping and ensure indexes. Failures leave the store not ready."""
        self._last_attempt = time.monotonic()
        try:
            self._client = MongoClient(
                self.uri, serverSelectionTimeoutMS=self.timeout_ms, tz_aware=True
            )
            self._client.admin.command("ping")
            self._db = self._client[self.db_name]
            self.ensure_indexes()
            logger.info("Connected to MongoDB (database: %s)", self.db_name)
            return True
        except PyMongoError as exc:
            logger.warning(
                "Could not connect to MongoDB: %s; store-backed routes will return 503", exc
            )
            self.close()
            return False

    def ensure_indexes(self) -> None:
        self._db[USERS].create_index([("email", ASCENDING)], unique=True)
        self._db[MEAL_PLANS].create_index([("userId", ASCENDING), ("createdAt", DESCENDING)])

    def close(self) -> None:
        """Close MongoDB connection."""
        try:
            if self._client is not None:
                self._client.close()
                logger.info("MongoDB client closed")
        finally:
            self._client = None
            self._db = None

    # ------------------ Health ------------------
    @property
    def is_ready(self) -> bool:
        return self._db is not None

    def ping(self) -> bool:
        """Round-trip to the server; False when disconnected or unreachable."""
        if self._client is None:
            return False
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False

    def status(self) -> str:
        return "connected" if self.ping() else "disconnected"

    # ------------------ Access ------------------
    def get_collection(self, name: str) -> Collection:
        """
        Collection handle; a store that is down is reconnected lazily, at most
        once per ``reconnect_interval`` seconds.
        """
        if self._db is None and self._reconnect_due():
            logger.info("MongoDB not connected; retrying")
            self.connect()
        if self._db is None:
            raise StoreUnavailableError("Database not available")
        return self._db[name]

    def _reconnect_due(self) -> bool:
        if self._last_attempt is None:
            return True
        return time.monotonic() - self._last_attempt >= self.reconnect_interval
