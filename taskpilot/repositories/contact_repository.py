from datetime import datetime, timezone
from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument

from taskpilot.models.contact import ContactModel
from taskpilot.repositories.common.mongo_repository import MongoRepository


class ContactRepository(MongoRepository):
    collection_name = ContactModel.collection_name

    @classmethod
    def create(cls, contact: ContactModel) -> ContactModel:
        contact.createdAt = datetime.now(timezone.utc)
        insert_result = cls.get_collection().insert_one(contact.to_document())
        contact.id = insert_result.inserted_id
        return contact

    @classmethod
    def get_by_id(cls, contact_id) -> Optional[ContactModel]:
        contact_data = cls.get_collection().find_one({"_id": cls.to_object_id(contact_id)})
        return ContactModel(**contact_data) if contact_data else None

    @classmethod
    def list_all(cls) -> List[ContactModel]:
        cursor = cls.get_collection().find({}).sort("createdAt", DESCENDING)
        return [ContactModel(**doc) for doc in cursor]

    @classmethod
    def update_status(cls, contact_id, status: str) -> Optional[ContactModel]:
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(contact_id)},
            {"$set": {"status": status}},
            return_document=ReturnDocument.AFTER,
        )
        return ContactModel(**updated_doc) if updated_doc else None

    @classmethod
    def delete(cls, contact_id) -> bool:
        result = cls.get_collection().delete_one({"_id": cls.to_object_id(contact_id)})
        return result.deleted_count > 0
