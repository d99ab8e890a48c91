import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile as StarletteUploadFile

from lms_backend.api.deps import AdminPrincipal, StaffPrincipal
from lms_backend.db.session import get_db
from lms_backend.models import Course
from lms_backend.schemas.common import ApiResponse, MessageResponse
from lms_backend.schemas.courses import CourseCreateRequest, CourseData, CourseLevel, CourseListData, CourseOut, CourseUpdateRequest
from lms_backend.services.course_service import (
    ImageUpload,
    create_course,
    delete_course,
    get_course_or_404,
    list_courses,
    save_course_image,
    update_course,
)

router = APIRouter(prefix="/api/courses", tags=["courses"])

FORM_LIST_FIELDS = ("skills", "curriculum")
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _course_data(course: Course) -> CourseData:
    return CourseData(course=CourseOut.model_validate(course))


async def _to_image(upload: StarletteUploadFile) -> ImageUpload:
    return ImageUpload(filename=upload.filename or "", content_type=upload.content_type, content=await upload.read())


def _form_list(values: list[Any]) -> Any:
    # A single JSON array string, or the field repeated once per item
    if len(values) == 1 and isinstance(values[0], str) and values[0].lstrip().startswith("["):
        try:
            return json.loads(values[0])
        except ValueError:
            return values
    return [value for value in values if value != ""]


async def _read_course_body(request: Request) -> tuple[Any, ImageUpload | None]:
    """Course writes take JSON, or form fields plus an optional `image` file."""
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(FORM_CONTENT_TYPES):
        try:
            return await request.json(), None
        except ValueError as exc:
            raise RequestValidationError(
                [{"loc": ("body",), "msg": "Request body must be JSON or form data", "type": "json_invalid"}]
            ) from exc

    form = await request.form()
    data: dict[str, Any] = {}
    image = None
    for key in form.keys():
        values = form.getlist(key)
        if key == "image" and isinstance(values[-1], StarletteUploadFile):
            # Browsers send an empty part when no file was picked
            if values[-1].filename:
                image = await _to_image(values[-1])
            continue
        data[key] = _form_list(values) if key in FORM_LIST_FIELDS else values[-1]
    return data, image


def _validate(model: type[BaseModel], data: Any) -> Any:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


async def course_create_body(request: Request) -> tuple[CourseCreateRequest, ImageUpload | None]:
    data, image = await _read_course_body(request)
    return _validate(CourseCreateRequest, data), image


async def course_update_body(request: Request) -> tuple[CourseUpdateRequest, ImageUpload | None]:
    data, image = await _read_course_body(request)
    return _validate(CourseUpdateRequest, data), image


CourseCreateBody = Annotated[tuple[CourseCreateRequest, ImageUpload | None], Depends(course_create_body)]
CourseUpdateBody = Annotated[tuple[CourseUpdateRequest, ImageUpload | None], Depends(course_update_body)]


@router.get("", response_model=ApiResponse[CourseListData])
def get_courses(
    level: CourseLevel | None = Query(default=None),
    instructor: str | None = Query(default=None),
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse[CourseListData]:
    courses = [CourseOut.model_validate(c) for c in list_courses(db, level=level, instructor=instructor, search=search)]
    return ApiResponse(results=len(courses), data=CourseListData(courses=courses))


@router.get("/{course_id}", response_model=ApiResponse[CourseData])
def get_course(course_id: str, db: Session = Depends(get_db)) -> ApiResponse[CourseData]:
    return ApiResponse(data=_course_data(get_course_or_404(db, course_id)))


@router.post("", response_model=ApiResponse[CourseData], status_code=status.HTTP_201_CREATED)
def post_course(
    principal: StaffPrincipal,
    body: CourseCreateBody,
    db: Session = Depends(get_db),
) -> ApiResponse[CourseData]:
    payload, image = body
    course = create_course(db, payload, created_by=principal.id, image=image)
    return ApiResponse(message="Course created successfully", data=_course_data(course))


@router.put("/{course_id}", response_model=ApiResponse[CourseData])
def put_course(
    course_id: str,
    _: StaffPrincipal,
    body: CourseUpdateBody,
    db: Session = Depends(get_db),
) -> ApiResponse[CourseData]:
    payload, image = body
    course = update_course(db, course_id, payload, image=image)
    return ApiResponse(message="Course updated successfully", data=_course_data(course))


@router.put("/{course_id}/image", response_model=ApiResponse[CourseData])
async def put_course_image(
    course_id: str,
    _: StaffPrincipal,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
) -> ApiResponse[CourseData]:
    course = save_course_image(db, course_id, await _to_image(image))
    return ApiResponse(message="Course image uploaded successfully", data=_course_data(course))


@router.delete("/{course_id}", response_model=MessageResponse)
def remove_course(course_id: str, _: AdminPrincipal, db: Session = Depends(get_db)) -> MessageResponse:
    delete_course(db, course_id)
    return MessageResponse(message="Course deleted successfully")
