from datetime import datetime, timezone
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument

from taskpilot.models.common.embedded import AttachmentModel, CommentModel
from taskpilot.models.task import TaskModel
from taskpilot.repositories.common.mongo_repository import MongoRepository


class TaskRepository(MongoRepository):
    collection_name = TaskModel.collection_name

    @classmethod
    def create(cls, task: TaskModel) -> TaskModel:
        now = datetime.now(timezone.utc)
        task.createdAt = now
        task.updatedAt = now
        insert_result = cls.get_collection().insert_one(task.to_document())
        task.id = insert_result.inserted_id
        return task

    @classmethod
    def get_by_id(cls, task_id) -> Optional[TaskModel]:
        task_data = cls.get_collection().find_one({"_id": cls.to_object_id(task_id)})
        return TaskModel(**task_data) if task_data else None

    @classmethod
    def list_tasks(
        cls, project_ids: Optional[List] = None, assignee_id=None, sort_field: str = "createdAt"
    ) -> List[TaskModel]:
        query = {}
        if project_ids is not None:
            query["project"] = {"$in": cls.to_object_ids(project_ids)}
        if assignee_id is not None:
            query["assignedTo"] = cls.to_object_id(assignee_id)

        direction = ASCENDING if sort_field == "dueDate" else DESCENDING
        cursor = cls.get_collection().find(query).sort(sort_field, direction)
        return [TaskModel(**doc) for doc in cursor]

    @classmethod
    def count(cls, project_ids: Optional[List] = None) -> int:
        query = {} if project_ids is None else {"project": {"$in": cls.to_object_ids(project_ids)}}
        return cls.get_collection().count_documents(query)

    @classmethod
    def count_by_status(cls, project_ids: Optional[List] = None) -> List[dict]:
        pipeline = []
        if project_ids is not None:
            pipeline.append({"$match": {"project": {"$in": cls.to_object_ids(project_ids)}}})
        pipeline.append({"$group": {"_id": "$status", "count": {"$sum": 1}}})
        return list(cls.get_collection().aggregate(pipeline))

    @classmethod
    def update(cls, task_id, update_data: dict) -> Optional[TaskModel]:
        update_data = {**update_data, "updatedAt": datetime.now(timezone.utc)}
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(task_id)},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )
        return TaskModel(**updated_doc) if updated_doc else None

    @classmethod
    def delete(cls, task_id) -> bool:
        result = cls.get_collection().delete_one({"_id": cls.to_object_id(task_id)})
        return result.deleted_count > 0

    @classmethod
    def delete_by_project(cls, project_id) -> int:
        result = cls.get_collection().delete_many({"project": cls.to_object_id(project_id)})
        return result.deleted_count

    @classmethod
    def add_comment(cls, task_id, comment: CommentModel) -> Optional[TaskModel]:
        return cls._push(task_id, "comments", comment.model_dump(by_alias=True))

    @classmethod
    def remove_comment(cls, task_id, comment_id) -> Optional[TaskModel]:
        return cls._pull(task_id, "comments", comment_id)

    @classmethod
    def add_attachment(cls, task_id, attachment: AttachmentModel) -> Optional[TaskModel]:
        return cls._push(task_id, "attachments", attachment.model_dump(by_alias=True))

    @classmethod
    def remove_attachment(cls, task_id, attachment_id) -> Optional[TaskModel]:
        return cls._pull(task_id, "attachments", attachment_id)

    @classmethod
    def _push(cls, task_id, field: str, entry: dict) -> Optional[TaskModel]:
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(task_id)},
            {"$push": {field: entry}, "$set": {"updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return TaskModel(**updated_doc) if updated_doc else None

    @classmethod
    def _pull(cls, task_id, field: str, entry_id) -> Optional[TaskModel]:
        updated_doc = cls.get_collection().find_one_and_update(
            {"_id": cls.to_object_id(task_id)},
            {"$pull": {field: {"_id": cls.to_object_id(entry_id)}}, "$set": {"updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return TaskModel(**updated_doc) if updated_doc else None
