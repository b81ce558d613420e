from typing import Iterable, List

from bson import ObjectId

from taskpilot_project.db.config import DatabaseManager


class MongoRepository:
    """
    Shared plumbing for the collection backed repositories. Subclasses set
    `collection_name` and expose classmethods only.
    """

    collection_name: str = None

    @classmethod
    def get_collection(cls):
        return DatabaseManager().get_collection(cls.collection_name)

    @staticmethod
    def to_object_id(value) -> ObjectId:
        """Raises bson InvalidId for malformed ids; the exception handler renders it as 400."""
        return value if isinstance(value, ObjectId) else ObjectId(value)

    @classmethod
    def to_object_ids(cls, values: Iterable) -> List[ObjectId]:
        return [cls.to_object_id(value) for value in values]
