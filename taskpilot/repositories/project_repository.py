import logging
from datetime import datetime, timezone
from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument

from taskpilot.models.common.embedded import AttachmentModel, CommentModel
from taskpilot.models.project import ProjectModel
from taskpilot.repositories.common.mongo_repository import MongoRepository
from taskpilot.repositories.task_repository import TaskRepository

logger = logging.getLogger(__name__)


class ProjectRepository(MongoRepository):
    collection_name = ProjectModel.collection_name

    @classmethod
    def create(cls, project: ProjectModel) -> ProjectModel:
        now = datetime.now(timezone.utc)
        project.createdAt = now
        project.updatedAt = now
        insert_result = cls.get_collection().insert_one(project.to_document())
        project.id = insert_result.inserted_id
        return project

    @classmethod
    def get_by_id(cls, project_id) -> Optional[ProjectModel]:
        project_data = cls.get_collection().find_one({"_id": cls.to_object_id(project_id)})
        return ProjectModel(**project_data) if project_data else None

    @classmethod
    def get_by_ids(cls, project_ids) -> List[ProjectModel]:
        if not project_ids:
            return []
        return cls._find({"_id": {"$in": cls.to_object_ids(project_ids)}})

    @classmethod
    def list_all(cls) -> List[ProjectModel]:
        return cls._find({})

    @classmethod
    def list_for_member(cls, user_id) -> List[ProjectModel]:
        return cls._find({"teamMembers": cls.to_object_id(user_id)})

    @classmethod
    def list_for_manager(cls, manager_id, team_member_ids: List) -> List[ProjectModel]:
        """Projects the manager runs, plus any project staffed by someone from their team."""
        return cls._find(
            {
                "$or": [
                    {"projectManager": cls.to_object_id(manager_id)},
                    {"teamMembers": {"$in": cls.to_object_ids(team_member_ids)}},
                ]
            }
        )

    @classmethod
    def list_managed_by(cls, manager_id) -> List[ProjectModel]:
        return cls._find({"projectManager": cls.to_object_id(manager_id)})

    @classmethod
    def _find(cls, query: dict) -> List[ProjectModel]:
        cursor = cls.get_collection().find(query).sort("createdAt", DESCENDING)
        return [ProjectModel(**doc) for doc in cursor]

    @classmethod
    def count(cls, project_ids: Optional[List] = None) -> int:
        query = {} if project_ids is None else {"_id": {"$in": cls.to_object_ids(project_ids)}}
        return cls.get_collection().count_documents(query)

    @classmethod
    def update(cls, project_id, update_data: dict) -> Optional[ProjectModel]:
        update_data = {**update_data, "updatedAt": datetime.now(timezone.utc)}
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(project_id)},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )
        return ProjectModel(**updated_doc) if updated_doc else None

    @classmethod
    def delete(cls, project_id) -> bool:
        """
        Deletes the project's tasks, then the project. The two writes are not
        in a transaction: a failure after the first leaves a taskless project.
        """
        object_id = cls.to_object_id(project_id)
        deleted_tasks = TaskRepository.delete_by_project(object_id)
        logger.info(f"Deleted {deleted_tasks} tasks of project {object_id}")
        result = cls.get_collection().delete_one({"_id": object_id})
        return result.deleted_count > 0

    @classmethod
    def add_comment(cls, project_id, comment: CommentModel) -> Optional[ProjectModel]:
        return cls._push(project_id, "comments", comment.model_dump(by_alias=True))

    @classmethod
    def remove_comment(cls, project_id, comment_id) -> Optional[ProjectModel]:
        return cls._pull(project_id, "comments", comment_id)

    @classmethod
    def add_attachment(cls, project_id, attachment: AttachmentModel) -> Optional[ProjectModel]:
        return cls._push(project_id, "attachments", attachment.model_dump(by_alias=True))

    @classmethod
    def remove_attachment(cls, project_id, attachment_id) -> Optional[ProjectModel]:
        return cls._pull(project_id, "attachments", attachment_id)

    @classmethod
    def _push(cls, project_id, field: str, entry: dict) -> Optional[ProjectModel]:
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(project_id)},
            {"$push": {field: entry}, "$set": {"updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return ProjectModel(**updated_doc) if updated_doc else None

    @classmethod
    def _pull(cls, project_id, field: str, entry_id) -> Optional[ProjectModel]:
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(project_id)},
            {"$pull": {field: {"_id": cls.to_object_id(entry_id)}}, "$set": {"updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return ProjectModel(**updated_doc) if updated_doc else None
