import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import ConflictError, ForbiddenError, NotFoundError
from lms_backend.core.security import Principal
from lms_backend.models import CourseContent
from lms_backend.schemas.course_content import CourseContentCreateRequest, CourseContentUpdateRequest, Section
from lms_backend.services.user_service import get_user_or_404

logger = logging.getLogger(__name__)


def _dump_sections(sections: list[Section]) -> list[dict]:
    return [section.model_dump(by_alias=True, exclude_none=True) for section in sections]


def get_content_or_404(db: Session, content_id: str) -> CourseContent:
    content = db.get(CourseContent, content_id)
    if not content:
        raise NotFoundError("Course content not found", code=ErrorCode.COURSE_CONTENT_NOT_FOUND)
    return content


def get_content_for_course(db: Session, course_id: str, *, principal: Principal) -> CourseContent:
    if not principal.is_staff:
        user = get_user_or_404(db, principal.id)
        if course_id not in (user.enrolled_courses or []):
            logger.info("Content for course %s denied to user %s: not enrolled", course_id, principal.id)
            raise ForbiddenError("You do not have access to this course", code=ErrorCode.COURSE_ACCESS_DENIED)

    content = db.execute(select(CourseContent).where(CourseContent.course_id == course_id)).scalars().first()
    if not content:
        raise NotFoundError("No content found for this course", code=ErrorCode.COURSE_CONTENT_NOT_FOUND)
    return content


def create_content(db: Session, payload: CourseContentCreateRequest) -> CourseContent:
    course_id = payload.course_id
    exists = db.execute(select(CourseContent.id).where(CourseContent.course_id == course_id)).scalar_one_or_none()
    if exists:
        raise ConflictError("Content already exists for this course", code=ErrorCode.COURSE_CONTENT_EXISTS)

    content = CourseContent(
        course_id=course_id,
        title=payload.title,
        sections=_dump_sections(payload.sections),
    )
    db.add(content)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Content already exists for this course", code=ErrorCode.COURSE_CONTENT_EXISTS) from exc
    db.refresh(content)

    logger.info("Course content created: %s (course %s)", content.id, course_id)
    return content


def update_content(db: Session, content_id: str, payload: CourseContentUpdateRequest) -> CourseContent:
    content = get_content_or_404(db, content_id)
    if payload.title is not None:
        content.title = payload.title
    if payload.sections is not None:
        content.sections = _dump_sections(payload.sections)
    db.commit()
    db.refresh(content)
    logger.info("Course content updated: %s", content_id)
    return content


def delete_content(db: Session, content_id: str) -> None:
    content = get_content_or_404(db, content_id)
    db.delete(content)
    db.commit()
    logger.info("Course content deleted: %s", content_id)
