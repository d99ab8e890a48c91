from datetime import datetime

from pydantic import ConfigDict, Field

from lms_backend.schemas.common import CamelModel


class AccessKeyCreateRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    key: str = Field(min_length=1, max_length=64)
    course_id: str = Field(min_length=1, max_length=36)
    expiry_date: datetime | None = None
    # 0 and null both mean unlimited
    max_uses: int | None = Field(default=None, ge=0)
    is_active: bool = True


class AccessKeyUpdateRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    key: str | None = Field(default=None, min_length=1, max_length=64)
    course_id: str | None = Field(default=None, min_length=1, max_length=36)
    expiry_date: datetime | None = None
    max_uses: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class AccessKeyOut(CamelModel):
    id: str
    key: str
    course_id: str
    expiry_date: datetime | None = None
    max_uses: int | None = None
    current_uses: int
    is_active: bool
    created_by: str | None = None
    last_used_at: datetime | None = None
    last_used_by: str | None = None
    created_at: datetime
    updated_at: datetime


class ValidateAccessKeyRequest(CamelModel):
    key: str = Field(min_length=1)
    course_id: str = Field(min_length=1)
    user_id: str | None = Field(default=None, max_length=36)


class RedemptionOut(CamelModel):
    course_id: str
    access_granted: bool


class UserCourseAccessOut(CamelModel):
    id: str
    user_id: str
    course_id: str
    access_key_id: str
    key: str
    granted_at: datetime
