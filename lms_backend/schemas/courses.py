from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field

from lms_backend.schemas.common import CamelModel

CourseLevel = Literal["Beginner", "Intermediate", "Advanced", "Beginner to Advanced"]


class CourseCreateRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=10)
    instructor: str = Field(min_length=1, max_length=120)
    duration: str = Field(min_length=1, max_length=64)
    level: CourseLevel
    price: str = Field(min_length=1, max_length=32)
    students: int = Field(default=0, ge=0)
    rating: float = Field(default=5.0, ge=0, le=5)
    image: str | None = Field(default=None, max_length=500)
    category: str = Field(default="", max_length=64)
    language: str = Field(default="English", max_length=64)
    skills: list[str] = Field(default_factory=list)
    curriculum: list[str] = Field(default_factory=list)
    is_active: bool = True


class CourseUpdateRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=3, max_length=200)
    description: str | None = Field(default=None, min_length=10)
    instructor: str | None = Field(default=None, min_length=1, max_length=120)
    duration: str | None = Field(default=None, min_length=1, max_length=64)
    level: CourseLevel | None = None
    price: str | None = Field(default=None, min_length=1, max_length=32)
    students: int | None = Field(default=None, ge=0)
    rating: float | None = Field(default=None, ge=0, le=5)
    image: str | None = Field(default=None, max_length=500)
    category: str | None = Field(default=None, max_length=64)
    language: str | None = Field(default=None, max_length=64)
    skills: list[str] | None = None
    curriculum: list[str] | None = None
    is_active: bool | None = None


class CourseOut(CamelModel):
    id: str
    title: str
    description: str
    instructor: str
    duration: str
    level: str
    price: str
    rating: float
    students: int
    image: str | None = None
    category: str = ""
    language: str = ""
    skills: list[str] = Field(default_factory=list)
    curriculum: list[str] = Field(default_factory=list)
    is_active: bool
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class CourseData(CamelModel):
    course: CourseOut


class CourseListData(CamelModel):
    courses: list[CourseOut]
