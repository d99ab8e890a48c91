from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from lms_backend.api.deps import CurrentPrincipal, StaffPrincipal
from lms_backend.db.session import get_db
from lms_backend.schemas.access_keys import (
    AccessKeyCreateRequest,
    AccessKeyOut,
    AccessKeyUpdateRequest,
    RedemptionOut,
    UserCourseAccessOut,
    ValidateAccessKeyRequest,
)
from lms_backend.schemas.common import ApiResponse, MessageResponse
from lms_backend.services.access_key_service import (
    create_access_key,
    delete_access_key,
    get_access_key_or_404,
    list_access_keys,
    list_user_grants,
    redeem_access_key,
    update_access_key,
)

router = APIRouter(prefix="/api/access-keys", tags=["access-keys"])


@router.post("/validate", response_model=ApiResponse[RedemptionOut])
def validate_access_key(payload: ValidateAccessKeyRequest, db: Session = Depends(get_db)) -> ApiResponse[RedemptionOut]:
    """Redeem one use of a key for a course. Public: `userId` is optional."""
    result = redeem_access_key(db, key=payload.key, course_id=payload.course_id, user_id=payload.user_id)
    return ApiResponse(
        message="Access key is valid",
        data=RedemptionOut(course_id=result.course_id, access_granted=result.access_granted),
    )


@router.get("/my-access", response_model=ApiResponse[list[UserCourseAccessOut]])
def my_access(principal: CurrentPrincipal, db: Session = Depends(get_db)) -> ApiResponse[list[UserCourseAccessOut]]:
    grants = [UserCourseAccessOut.model_validate(row) for row in list_user_grants(db, principal.id)]
    return ApiResponse(results=len(grants), data=grants)


@router.post("", response_model=ApiResponse[AccessKeyOut], status_code=status.HTTP_201_CREATED)
def post_access_key(
    payload: AccessKeyCreateRequest,
    principal: StaffPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[AccessKeyOut]:
    access_key = create_access_key(db, payload, created_by=principal.id)
    return ApiResponse(message="Access key created successfully", data=AccessKeyOut.model_validate(access_key))


@router.get("", response_model=ApiResponse[list[AccessKeyOut]])
def get_access_keys(
    _: StaffPrincipal,
    course_id: str | None = Query(default=None, alias="courseId"),
    db: Session = Depends(get_db),
) -> ApiResponse[list[AccessKeyOut]]:
    keys = [AccessKeyOut.model_validate(row) for row in list_access_keys(db, course_id=course_id)]
    return ApiResponse(results=len(keys), data=keys)


@router.get("/{access_key_id}", response_model=ApiResponse[AccessKeyOut])
def get_access_key(access_key_id: str, _: StaffPrincipal, db: Session = Depends(get_db)) -> ApiResponse[AccessKeyOut]:
    return ApiResponse(data=AccessKeyOut.model_validate(get_access_key_or_404(db, access_key_id)))


@router.put("/{access_key_id}", response_model=ApiResponse[AccessKeyOut])
def put_access_key(
    access_key_id: str,
    payload: AccessKeyUpdateRequest,
    _: StaffPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[AccessKeyOut]:
    access_key = update_access_key(db, access_key_id, payload)
    return ApiResponse(message="Access key updated successfully", data=AccessKeyOut.model_validate(access_key))


@router.delete("/{access_key_id}", response_model=MessageResponse)
def remove_access_key(access_key_id: str, _: StaffPrincipal, db: Session = Depends(get_db)) -> MessageResponse:
    delete_access_key(db, access_key_id)
    return MessageResponse(message="Access key deleted successfully")
