from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pydantic_core import core_schema


class PyObjectId(ObjectId):
    """
    ObjectId usable as a pydantic field type. Accepts ObjectId instances and
    24 character hex strings, dumps to str in JSON mode and stays an ObjectId
    in python mode so documents can be written back to MongoDB as is.
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str, when_used="json"),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, _core_schema, handler):
        return {"type": "string", "example": "507f1f77bcf86cd799439011"}

    @classmethod
    def validate(cls, value: Any) -> ObjectId:
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str):
            try:
                return ObjectId(value)
            except InvalidId:
                raise ValueError(f"{value} is not a valid ObjectId.")
        raise ValueError(f"Expected ObjectId or str, got {type(value).__name__}")
