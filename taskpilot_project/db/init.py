import logging
import time

from pymongo import ASCENDING, DESCENDING

from taskpilot_project.db.config import DatabaseManager

logger = logging.getLogger(__name__)

INDEXES = {
    "users": [
        {"keys": [("email", ASCENDING)], "unique": True},
        {"keys": [("teamId", ASCENDING)]},
        {"keys": [("resetPasswordToken", ASCENDING)], "sparse": True},
    ],
    "teams": [
        {"keys": [("name", ASCENDING)], "unique": True},
    ],
    "projects": [
        {"keys": [("teamMembers", ASCENDING)]},
        {"keys": [("projectManager", ASCENDING)]},
    ],
    "tasks": [
        {"keys": [("project", ASCENDING)]},
        {"keys": [("assignedTo", ASCENDING)]},
    ],
    "chats": [
        {"keys": [("chatId", ASCENDING)], "unique": True},
        {"keys": [("participants", ASCENDING)]},
    ],
    "messages": [
        {"keys": [("chatId", ASCENDING), ("createdAt", DESCENDING)]},
    ],
    "notifications": [
        {"keys": [("recipient", ASCENDING), ("isRead", ASCENDING), ("createdAt", DESCENDING)]},
    ],
}


def ensure_indexes(db_manager: DatabaseManager) -> None:
    for collection_name, indexes in INDEXES.items():
        collection = db_manager.get_collection(collection_name)
        for index in indexes:
            options = {key: value for key, value in index.items() if key != "keys"}
            collection.create_index(index["keys"], **options)
        logger.info(f"Indexes ensured for '{collection_name}'")


def initialize_database(max_retries=5, retry_delay=2):
    """
    Wait for MongoDB to come up and create the indexes the application relies on.
    Includes retry logic for Docker environments.
    """
    db_manager = DatabaseManager()

    for attempt in range(max_retries):
        try:
            if not db_manager.check_database_health():
                if attempt < max_retries - 1:
                    logger.warning(
                        f"Database health check failed, attempt {attempt + 1}. Retrying in {retry_delay} seconds..."
                    )
                    time.sleep(retry_delay)
                    continue
                else:
                    logger.error("All database connection attempts failed")
                    return False
            break
        except Exception as e:
            if attempt < max_retries - 1:
                logger.warning(f"Error checking database health: {str(e)}. Retrying in {retry_delay} seconds...")
                time.sleep(retry_delay)
            else:
                logger.error(f"Failed to connect to database after {max_retries} attempts: {str(e)}")
                return False

    try:
        ensure_indexes(db_manager)
        logger.info("Database initialization completed successfully")
        return True
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}")
        return False
