import logging
import threading

from django.conf import settings
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Process wide owner of the MongoClient. Every repository goes through
    get_collection so tests can point the whole app at another database
    with override_settings + reset().
    """

    __instance = None
    __lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        if cls.__instance is None:
            with cls.__lock:
                if cls.__instance is None:
                    cls.__instance = super().__new__(cls)
                    cls.__instance._database_client = None
                    cls.__instance._db = None
        return cls.__instance

    def _get_database_client(self) -> MongoClient:
        if self._database_client is None:
            self._database_client = MongoClient(settings.MONGODB_URI, tz_aware=True)
        return self._database_client

    def get_database(self):
        if self._db is None:
            self._db = self._get_database_client()[settings.DB_NAME]
        return self._db

    def get_collection(self, collection_name: str):
        return self.get_database()[collection_name]

    def check_database_health(self) -> bool:
        try:
            self._get_database_client().admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB health check failed: {str(e)}")
            return False

    @classmethod
    def reset(cls):
        """Drop the cached client so the next call reads the current settings."""
        with cls.__lock:
            if cls.__instance is not None and cls.__instance._database_client is not None:
                cls.__instance._database_client.close()
            cls.__instance = None
