from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument

from taskpilot.models.message import MessageModel
from taskpilot.repositories.common.mongo_repository import MongoRepository


class MessageRepository(MongoRepository):
    collection_name = MessageModel.collection_name

    @classmethod
    def create(cls, message: MessageModel) -> MessageModel:
        now = datetime.now(timezone.utc)
        message.createdAt = now
        message.updatedAt = now
        insert_result = cls.get_collection().insert_one(message.to_document())
        message.id = insert_result.inserted_id
        return message

    @classmethod
    def get_by_id(cls, message_id) -> Optional[MessageModel]:
        message_data = cls.get_collection().find_one({"_id": cls.to_object_id(message_id)})
        return MessageModel(**message_data) if message_data else None

    @classmethod
    def list_page(cls, chat_id: str, page: int, limit: int) -> Tuple[List[MessageModel], int]:
        """
        Returns the `page`-th newest slice of the chat's visible messages in
        chronological order, together with the total number of visible messages.
        """
        query = {"chatId": chat_id, "isDeleted": False}
        collection = cls.get_collection()
        cursor = collection.find(query).sort("createdAt", DESCENDING).skip((page - 1) * limit).limit(limit)
        messages = [MessageModel(**doc) for doc in cursor]
        messages.reverse()
        return messages, collection.count_documents(query)

    @classmethod
    def mark_chat_read(cls, chat_id: str, user_id) -> int:
        """
        Adds one read receipt for `user_id` to every message in the chat it has
        not read yet. The `readBy.user $ne` filter keeps repeated calls from
        adding a second receipt.
        """
        user_object_id = cls.to_object_id(user_id)
        result = cls.get_collection().update_many(
            {"chatId": chat_id, "sender": {"$ne": user_object_id}, "readBy.user": {"$ne": user_object_id}},
            {"$push": {"readBy": {"user": user_object_id, "readAt": datetime.now(timezone.utc)}}},
        )
        return result.modified_count

    @classmethod
    def mark_read(cls, message_id, user_id) -> Optional[MessageModel]:
        user_object_id = cls.to_object_id(user_id)
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(message_id), "readBy.user": {"$ne": user_object_id}},
            {"$push": {"readBy": {"user": user_object_id, "readAt": datetime.now(timezone.utc)}}},
            return_document=ReturnDocument.AFTER,
        )
        return MessageModel(**updated_doc) if updated_doc else None

    @classmethod
    def soft_delete(cls, message_id) -> bool:
        result = cls.get_collection().update_one(
            {"_id": cls.to_object_id(message_id)},
            {"$set": {"isDeleted": True, "updatedAt": datetime.now(timezone.utc)}},
        )
        return result.matched_count > 0

    @classmethod
    def delete_by_chat(cls, chat_id: str) -> int:
        result = cls.get_collection().delete_many({"chatId": chat_id})
        return result.deleted_count

    @classmethod
    def unread_counts(cls, chat_ids: List[str], user_id) -> Dict[str, int]:
        if not chat_ids:
            return {}
        user_object_id = cls.to_object_id(user_id)
        pipeline = [
            {
                "$match": {
                    "chatId": {"$in": chat_ids},
                    "sender": {"$ne": user_object_id},
                    "isDeleted": False,
                    "readBy.user": {"$ne": user_object_id},
                }
            },
            {"$group": {"_id": "$chatId", "count": {"$sum": 1}}},
        ]
        return {item["_id"]: item["count"] for item in cls.get_collection().aggregate(pipeline)}
