from datetime import datetime, timezone
from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument

from taskpilot.models.notification import NotificationModel
from taskpilot.repositories.common.mongo_repository import MongoRepository


class NotificationRepository(MongoRepository):
    """
    Every read and write is scoped to the recipient, so one user can never
    touch another user's notifications even with a valid notification id.
    """

    collection_name = NotificationModel.collection_name

    @classmethod
    def create_many(cls, notifications: List[NotificationModel]) -> List[NotificationModel]:
        if not notifications:
            return []
        now = datetime.now(timezone.utc)
        for notification in notifications:
            notification.createdAt = now
            notification.updatedAt = now
        insert_result = cls.get_collection().insert_many([n.to_document() for n in notifications])
        for notification, inserted_id in zip(notifications, insert_result.inserted_ids):
            notification.id = inserted_id
        return notifications

    @classmethod
    def list_for_recipient(cls, recipient_id, limit: int) -> List[NotificationModel]:
        cursor = (
            cls.get_collection()
            .find({"recipient": cls.to_object_id(recipient_id)})
            .sort("createdAt", DESCENDING)
            .limit(limit)
        )
        return [NotificationModel(**doc) for doc in cursor]

    @classmethod
    def unread_count(cls, recipient_id) -> int:
        return cls.get_collection().count_documents({"recipient": cls.to_object_id(recipient_id), "isRead": False})

    @classmethod
    def mark_read(cls, notification_id, recipient_id) -> Optional[NotificationModel]:
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(notification_id), "recipient": cls.to_object_id(recipient_id)},
            {"$set": {"isRead": True, "updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return NotificationModel(**updated_doc) if updated_doc else None

    @classmethod
    def mark_all_read(cls, recipient_id) -> int:
        result = cls.get_collection().update_many(
            {"recipient": cls.to_object_id(recipient_id), "isRead": False},
            {"$set": {"isRead": True, "updatedAt": datetime.now(timezone.utc)}},
        )
        return result.modified_count

    @classmethod
    def delete(cls, notification_id, recipient_id) -> bool:
        result = cls.get_collection().delete_one(
            {"_id": cls.to_object_id(notification_id), "recipient": cls.to_object_id(recipient_id)}
        )
        return result.deleted_count > 0

    @classmethod
    def delete_all(cls, recipient_id) -> int:
        result = cls.get_collection().delete_many({"recipient": cls.to_object_id(recipient_id)})
        return result.deleted_count
