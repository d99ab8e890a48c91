from datetime import datetime

from pydantic import Field

from lms_backend.schemas.common import CamelModel


class CartItem(CamelModel):
    id: str
    title: str
    instructor: str = "Course Instructor"
    price: str | float
    image: str = ""
    duration: str = "N/A"
    level: str = "All levels"
    added_at: datetime


class AddToCartRequest(CamelModel):
    course_id: str = Field(min_length=1, max_length=36)
    title: str = Field(min_length=1, max_length=200)
    price: str | float
    instructor: str | None = None
    image: str | None = None
    duration: str | None = None
    level: str | None = None


class CartData(CamelModel):
    cart: list[CartItem]
