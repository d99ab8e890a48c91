from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field

from lms_backend.schemas.common import CamelModel


class Lesson(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    type: Literal["video", "document", "download"]
    duration: str | None = None
    description: str | None = None
    url: str | None = None
    content: str | None = None


class Section(CamelModel):
    section_title: str = Field(min_length=1, max_length=200)
    lessons: list[Lesson] = Field(default_factory=list)


class CourseContentCreateRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    course_id: str = Field(min_length=1, max_length=36)
    title: str = Field(min_length=1, max_length=200)
    sections: list[Section] = Field(default_factory=list)


class CourseContentUpdateRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    sections: list[Section] | None = None


class CourseContentOut(CamelModel):
    id: str
    course_id: str
    title: str
    sections: list[Section]
    created_at: datetime
    updated_at: datetime
