from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.orm import Session

from lms_backend.core.config import get_settings
from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import NotFoundError, ValidationError
from lms_backend.core.security import now_utc
from lms_backend.models import Course
from lms_backend.schemas.courses import CourseCreateRequest, CourseUpdateRequest

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}


def list_courses(
    db: Session,
    *,
    level: str | None = None,
    instructor: str | None = None,
    search: str | None = None,
) -> list[Course]:
    stmt = select(Course)
    if level:
        stmt = stmt.where(Course.level == level)
    if instructor:
        stmt = stmt.where(Course.instructor == instructor)
    courses = list(db.execute(stmt.order_by(Course.created_at.desc())).scalars().all())

    if search:
        needle = search.lower()
        courses = [
            course
            for course in courses
            if needle in course.title.lower()
            or needle in course.description.lower()
            or needle in course.instructor.lower()
        ]
    return courses


def get_course_or_404(db: Session, course_id: str) -> Course:
    course = db.get(Course, course_id)
    if not course:
        raise NotFoundError("Course not found", code=ErrorCode.COURSE_NOT_FOUND)
    return course


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content_type: str | None
    content: bytes


def store_course_image(upload: ImageUpload) -> str:
    """Validate an uploaded course image, write it under the uploads dir and return its public path."""
    settings = get_settings()

    extension = Path(upload.filename or "").suffix.lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS or (upload.content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Only image files are allowed!", code=ErrorCode.INVALID_FILE_TYPE)
    if not upload.content:
        raise ValidationError("Uploaded file is empty", code=ErrorCode.INVALID_FILE)
    if len(upload.content) > settings.max_image_bytes:
        raise ValidationError("Image exceeds the maximum upload size", code=ErrorCode.INVALID_FILE)

    target_dir = Path(settings.uploads_dir) / "courses"
    target_dir.mkdir(parents=True, exist_ok=True)
    stored_name = f"course-{int(now_utc().timestamp() * 1000)}-{secrets.token_hex(4)}{extension}"
    (target_dir / stored_name).write_bytes(upload.content)
    return f"/uploads/courses/{stored_name}"


def create_course(
    db: Session,
    payload: CourseCreateRequest,
    *,
    created_by: str,
    image: ImageUpload | None = None,
) -> Course:
    course = Course(**payload.model_dump(), created_by=created_by)
    if image is not None:
        course.image = store_course_image(image)
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info("Course created: %s (ID: %s)", course.title, course.id)
    return course


def update_course(
    db: Session,
    course_id: str,
    payload: CourseUpdateRequest,
    *,
    image: ImageUpload | None = None,
) -> Course:
    course = get_course_or_404(db, course_id)
    stored_image = store_course_image(image) if image is not None else None
    for field, value in payload.model_dump(exclude_unset=True).items():
        # image is the only nullable column; everything else ignores explicit nulls
        if value is None and field != "image":
            continue
        setattr(course, field, value)
    if stored_image is not None:
        course.image = stored_image
    db.commit()
    db.refresh(course)
    logger.info("Course updated: %s", course_id)
    return course


def delete_course(db: Session, course_id: str) -> None:
    course = get_course_or_404(db, course_id)
    db.delete(course)
    db.commit()
    logger.info("Course deleted: %s", course_id)


def save_course_image(db: Session, course_id: str, image: ImageUpload) -> Course:
    course = get_course_or_404(db, course_id)
    course.image = store_course_image(image)
    db.commit()
    db.refresh(course)
    logger.info("Course image stored: %s -> %s", course_id, course.image)
    return course
