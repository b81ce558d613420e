from datetime import datetime, timezone
from typing import List, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from taskpilot.constants.role import Role
from taskpilot.exceptions.conflict_exceptions import UserAlreadyExistsError
from taskpilot.models.user import UserModel
from taskpilot.repositories.common.mongo_repository import MongoRepository


class UserRepository(MongoRepository):
    collection_name = UserModel.collection_name

    @classmethod
    def create(cls, user: UserModel) -> UserModel:
        collection = cls.get_collection()
        try:
            insert_result = collection.insert_one(user.to_document())
        except DuplicateKeyError as e:
            raise UserAlreadyExistsError() from e
        user.id = insert_result.inserted_id
        return user

    @classmethod
    def get_by_id(cls, user_id) -> Optional[UserModel]:
        doc = cls.get_collection().find_one({"_id": cls.to_object_id(user_id)})
        return UserModel(**doc) if doc else None

    @classmethod
    def get_by_ids(cls, user_ids) -> List[UserModel]:
        """
        Get multiple users by their IDs in a single database query.
        Returns only the users that exist.
        """
        if not user_ids:
            return []
        cursor = cls.get_collection().find({"_id": {"$in": cls.to_object_ids(user_ids)}})
        return [UserModel(**doc) for doc in cursor]

    @classmethod
    def get_by_email(cls, email: str) -> Optional[UserModel]:
        doc = cls.get_collection().find_one({"email": email.lower()})
        return UserModel(**doc) if doc else None

    @classmethod
    def get_by_reset_token(cls, token: str) -> Optional[UserModel]:
        doc = cls.get_collection().find_one(
            {"resetPasswordToken": token, "resetPasswordExpires": {"$gt": datetime.now(timezone.utc)}}
        )
        return UserModel(**doc) if doc else None

    @classmethod
    def get_first_admin(cls) -> Optional[UserModel]:
        doc = cls.get_collection().find_one({"role": Role.ADMIN.value}, sort=[("createdAt", ASCENDING)])
        return UserModel(**doc) if doc else None

    @classmethod
    def list_by_role(cls, roles: List[str]) -> List[UserModel]:
        cursor = cls.get_collection().find({"role": {"$in": roles}}).sort("name", ASCENDING)
        return [UserModel(**doc) for doc in cursor]

    @classmethod
    def list_by_team(cls, team_id, roles: Optional[List[str]] = None) -> List[UserModel]:
        query = {"teamId": cls.to_object_id(team_id)}
        if roles:
            query["role"] = {"$in": roles}
        cursor = cls.get_collection().find(query).sort("name", ASCENDING)
        return [UserModel(**doc) for doc in cursor]

    @classmethod
    def list_without_team(cls, roles: List[str]) -> List[UserModel]:
        query = {"role": {"$in": roles}, "$or": [{"teamId": None}, {"teamId": {"$exists": False}}]}
        cursor = cls.get_collection().find(query).sort("name", ASCENDING)
        return [UserModel(**doc) for doc in cursor]

    @classmethod
    def list_all(cls, exclude_id=None) -> List[UserModel]:
        query = {"_id": {"$ne": cls.to_object_id(exclude_id)}} if exclude_id else {}
        cursor = cls.get_collection().find(query).sort("name", ASCENDING)
        return [UserModel(**doc) for doc in cursor]

    @classmethod
    def count_by_role(cls, role: str) -> int:
        return cls.get_collection().count_documents({"role": role})

    @classmethod
    def update(cls, user_id, update_data: dict) -> Optional[UserModel]:
        update_data = {**update_data, "updatedAt": datetime.now(timezone.utc)}
        doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(user_id)},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )
        return UserModel(**doc) if doc else None

    @classmethod
    def set_team(cls, user_id, team_id) -> None:
        cls.get_collection().update_one(
            {"_id": cls.to_object_id(user_id)},
            {"$set": {"teamId": cls.to_object_id(team_id), "updatedAt": datetime.now(timezone.utc)}},
        )

    @classmethod
    def clear_team(cls, user_id) -> None:
        cls.get_collection().update_one(
            {"_id": cls.to_object_id(user_id)},
            {"$set": {"teamId": None, "updatedAt": datetime.now(timezone.utc)}},
        )

    @classmethod
    def set_reset_token(cls, user_id, token: Optional[str], expires: Optional[datetime]) -> None:
        cls.get_collection().update_one(
            {"_id": cls.to_object_id(user_id)},
            {"$set": {"resetPasswordToken": token, "resetPasswordExpires": expires}},
        )
