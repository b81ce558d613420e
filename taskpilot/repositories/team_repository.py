from datetime import datetime, timezone
from typing import List, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from taskpilot.exceptions.conflict_exceptions import TeamNameTakenError
from taskpilot.models.team import TeamModel
from taskpilot.repositories.common.mongo_repository import MongoRepository


class TeamRepository(MongoRepository):
    collection_name = TeamModel.collection_name

    @classmethod
    def create(cls, team: TeamModel) -> TeamModel:
        """
        Creates a new team in the repository.
        """
        teams_collection = cls.get_collection()
        now = datetime.now(timezone.utc)
        team.createdAt = now
        team.updatedAt = now

        try:
            insert_result = teams_collection.insert_one(team.to_document())
        except DuplicateKeyError as e:
            raise TeamNameTakenError() from e
        team.id = insert_result.inserted_id
        return team

    @classmethod
    def get_by_id(cls, team_id) -> Optional[TeamModel]:
        team_data = cls.get_collection().find_one({"_id": cls.to_object_id(team_id)})
        return TeamModel(**team_data) if team_data else None

    @classmethod
    def get_by_name(cls, name: str) -> Optional[TeamModel]:
        team_data = cls.get_collection().find_one({"name": name})
        return TeamModel(**team_data) if team_data else None

    @classmethod
    def get_by_manager(cls, manager_id) -> Optional[TeamModel]:
        team_data = cls.get_collection().find_one({"manager": cls.to_object_id(manager_id)})
        return TeamModel(**team_data) if team_data else None

    @classmethod
    def list_all(cls) -> List[TeamModel]:
        cursor = cls.get_collection().find({}).sort("createdAt", ASCENDING)
        return [TeamModel(**doc) for doc in cursor]

    @classmethod
    def list_active(cls) -> List[TeamModel]:
        cursor = cls.get_collection().find({"status": "active"}).sort("name", ASCENDING)
        return [TeamModel(**doc) for doc in cursor]

    @classmethod
    def add_member(cls, team_id, user_id) -> Optional[TeamModel]:
        """$addToSet keeps `members` a set even when two requests race."""
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(team_id)},
            {
                "$addToSet": {"members": cls.to_object_id(user_id)},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
            return_document=ReturnDocument.AFTER,
        )
        return TeamModel(**updated_doc) if updated_doc else None

    @classmethod
    def remove_member(cls, team_id, user_id) -> Optional[TeamModel]:
        """The manager is never pulled, which keeps manager in members on every write."""
        object_id = cls.to_object_id(user_id)
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(team_id), "manager": {"$ne": object_id}},
            {"$pull": {"members": object_id}, "$set": {"updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return TeamModel(**updated_doc) if updated_doc else None
