from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from lms_backend.schemas.cart import CartItem
from lms_backend.schemas.common import CamelModel

Role = Literal["student", "instructor", "admin"]


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    role: Role = "student"
    first_name: str = Field(default="", max_length=60)
    last_name: str = Field(default="", max_length=60)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class ProfileUpdateRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    first_name: str | None = Field(default=None, max_length=60)
    last_name: str | None = Field(default=None, max_length=60)
    bio: str | None = Field(default=None, max_length=2000)
    profile_image: str | None = Field(default=None, max_length=500)


class UserSummary(CamelModel):
    id: str
    email: str
    name: str
    role: str


class UserOut(CamelModel):
    id: str
    email: str
    name: str
    first_name: str = ""
    last_name: str = ""
    role: str
    bio: str = ""
    profile_image: str = ""
    cart: list[CartItem] = Field(default_factory=list)
    enrolled_courses: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class AuthData(CamelModel):
    user: UserSummary
    token: str


class UserData(CamelModel):
    user: UserOut
