from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


@dataclass
class MongoConfig:
    uri: str
    database: str
    timeout_ms: int = 5000


class DatabaseConnection:
    """Singleton-like holder of the process-wide MongoClient.

    Note: MongoClient keeps its own thread-safe connection pool, so one client
    per process is enough for a Flask app.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: MongoConfig):
        self._config = config
        self._client: Optional[MongoClient] = None

    @classmethod
    def get_instance(cls, config: MongoConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            # Connects lazily; the first operation triggers server selection.
            self._client = MongoClient(
                self._config.uri,
                serverSelectionTimeoutMS=int(self._config.timeout_ms),
                tz_aware=True,
            )
        return self._client

    @property
    def db(self) -> Database:
        return self.client[self._config.database]

    def collection(self, name: str) -> Collection:
        return self.db[name]

    def ping(self) -> bool:
        try:
            self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
