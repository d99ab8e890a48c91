from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lms_backend.api.deps import AdminPrincipal, CurrentPrincipal, StaffPrincipal
from lms_backend.db.session import get_db
from lms_backend.schemas.common import ApiResponse, MessageResponse
from lms_backend.schemas.course_content import CourseContentCreateRequest, CourseContentOut, CourseContentUpdateRequest
from lms_backend.services.course_content_service import (
    create_content,
    delete_content,
    get_content_for_course,
    get_content_or_404,
    update_content,
)

router = APIRouter(prefix="/api/course-content", tags=["course-content"])


@router.get("/course/{course_id}", response_model=ApiResponse[CourseContentOut])
def get_course_content_by_course(
    course_id: str,
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[CourseContentOut]:
    content = get_content_for_course(db, course_id, principal=principal)
    return ApiResponse(data=CourseContentOut.model_validate(content))


@router.post("", response_model=ApiResponse[CourseContentOut], status_code=status.HTTP_201_CREATED)
def post_course_content(
    payload: CourseContentCreateRequest,
    _: StaffPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[CourseContentOut]:
    content = create_content(db, payload)
    return ApiResponse(message="Course content created successfully", data=CourseContentOut.model_validate(content))


@router.get("/{content_id}", response_model=ApiResponse[CourseContentOut])
def get_course_content(content_id: str, _: CurrentPrincipal, db: Session = Depends(get_db)) -> ApiResponse[CourseContentOut]:
    return ApiResponse(data=CourseContentOut.model_validate(get_content_or_404(db, content_id)))


@router.put("/{content_id}", response_model=ApiResponse[CourseContentOut])
def put_course_content(
    content_id: str,
    payload: CourseContentUpdateRequest,
    _: StaffPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[CourseContentOut]:
    content = update_content(db, content_id, payload)
    return ApiResponse(message="Course content updated successfully", data=CourseContentOut.model_validate(content))


@router.delete("/{content_id}", response_model=MessageResponse)
def remove_course_content(content_id: str, _: AdminPrincipal, db: Session = Depends(get_db)) -> MessageResponse:
    delete_content(db, content_id)
    return MessageResponse(message="Course content deleted successfully")
