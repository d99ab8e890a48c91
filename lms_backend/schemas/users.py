from pydantic import EmailStr, Field

from lms_backend.schemas.auth import Role, UserOut
from lms_backend.schemas.common import CamelModel


class UserUpdateRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6, max_length=128)
    role: Role | None = None
    first_name: str | None = Field(default=None, max_length=60)
    last_name: str | None = Field(default=None, max_length=60)
    bio: str | None = Field(default=None, max_length=2000)
    profile_image: str | None = Field(default=None, max_length=500)


class UserListData(CamelModel):
    users: list[UserOut]
