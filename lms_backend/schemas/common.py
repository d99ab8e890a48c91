from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for wire models: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ApiResponse(BaseModel, Generic[DataT]):
    status: str = "success"
    message: str | None = None
    results: int | None = None
    data: DataT | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_meta(self, handler):
        # message and results only appear when set; nulls inside data are kept
        payload = handler(self)
        for key in ("message", "results"):
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
