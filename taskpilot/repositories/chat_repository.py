from datetime import datetime, timezone
from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument

from taskpilot.constants.chat import ChatType
from taskpilot.models.chat import ChatModel, LastMessageModel
from taskpilot.repositories.common.mongo_repository import MongoRepository


class ChatRepository(MongoRepository):
    collection_name = ChatModel.collection_name

    @classmethod
    def create(cls, chat: ChatModel) -> ChatModel:
        now = datetime.now(timezone.utc)
        chat.createdAt = now
        chat.updatedAt = now
        insert_result = cls.get_collection().insert_one(chat.to_document())
        chat.id = insert_result.inserted_id
        return chat

    @classmethod
    def get_by_chat_id(cls, chat_id: str, active_only: bool = True) -> Optional[ChatModel]:
        query = {"chatId": chat_id}
        if active_only:
            query["isActive"] = True
        chat_data = cls.get_collection().find_one(query)
        return ChatModel(**chat_data) if chat_data else None

    @classmethod
    def find_direct_chat(cls, user_id, participant_id) -> Optional[ChatModel]:
        """
        Looked up before insert without a uniqueness constraint, so two
        concurrent requests for the same pair can both create a chat.
        """
        chat_data = cls.get_collection().find_one(
            {
                "participants": {"$all": cls.to_object_ids([user_id, participant_id])},
                "chatType": ChatType.DIRECT.value,
                "isActive": True,
            }
        )
        return ChatModel(**chat_data) if chat_data else None

    @classmethod
    def find_team_chat(cls, team_id) -> Optional[ChatModel]:
        chat_data = cls.get_collection().find_one(
            {"teamId": cls.to_object_id(team_id), "chatType": ChatType.TEAM.value, "isActive": True}
        )
        return ChatModel(**chat_data) if chat_data else None

    @classmethod
    def list_for_user(cls, user_id) -> List[ChatModel]:
        cursor = (
            cls.get_collection()
            .find({"participants": cls.to_object_id(user_id), "isActive": True})
            .sort("updatedAt", DESCENDING)
        )
        return [ChatModel(**doc) for doc in cursor]

    @classmethod
    def list_chat_ids_for_user(cls, user_id) -> List[str]:
        cursor = cls.get_collection().find(
            {"participants": cls.to_object_id(user_id), "isActive": True}, {"chatId": 1}
        )
        return [doc["chatId"] for doc in cursor]

    @classmethod
    def update_last_message(cls, chat_id: str, last_message: LastMessageModel) -> Optional[ChatModel]:
        updated_doc = cls.get_collection().find_one_and_update(
            {"chatId": chat_id},
            {"$set": {"lastMessage": last_message.model_dump(), "updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return ChatModel(**updated_doc) if updated_doc else None

    @classmethod
    def deactivate(cls, chat_id: str) -> bool:
        result = cls.get_collection().update_one(
            {"chatId": chat_id},
            {"$set": {"isActive": False, "updatedAt": datetime.now(timezone.utc)}},
        )
        return result.modified_count > 0
