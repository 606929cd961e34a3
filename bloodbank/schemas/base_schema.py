from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema for request bodies"""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        use_enum_values=True,
        frozen=False,
        extra="forbid",
        from_attributes=True,
        populate_by_name=True,
    )


class RowSchema(BaseModel):
    """Base schema for rows read back from the database"""

    model_config = ConfigDict(from_attributes=True)


T = TypeVar("T")


class ResponseWrapper(BaseModel, Generic[T]):
    message: str
    data: T


class ListResponseWrapper(BaseModel, Generic[T]):
    message: str
    data: List[T]
