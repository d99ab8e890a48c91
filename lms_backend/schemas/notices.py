from datetime import datetime
from typing import Literal

from pydantic import Field

from lms_backend.schemas.common import CamelModel

NoticeType = Literal["info", "warning", "success", "error"]


class NoticeCreateRequest(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    type: NoticeType = "info"
    priority: int = 0
    is_active: bool = True


class NoticeUpdateRequest(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    type: NoticeType | None = None
    priority: int | None = None
    is_active: bool | None = None


class NoticeOut(CamelModel):
    id: str
    title: str
    content: str
    type: str
    priority: int
    is_active: bool
    created_by: str | None = None
    created_by_name: str = ""
    updated_by: str | None = None
    updated_by_name: str | None = None
    created_at: datetime
    updated_at: datetime


class NoticeData(CamelModel):
    notice: NoticeOut


class NoticeListData(CamelModel):
    notices: list[NoticeOut]
