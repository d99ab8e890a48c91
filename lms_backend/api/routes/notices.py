from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lms_backend.api.deps import AdminPrincipal
from lms_backend.db.session import get_db
from lms_backend.models import Notice
from lms_backend.schemas.common import ApiResponse, MessageResponse
from lms_backend.schemas.notices import NoticeCreateRequest, NoticeData, NoticeListData, NoticeOut, NoticeUpdateRequest
from lms_backend.services.notice_service import (
    create_notice,
    delete_notice,
    get_notice_or_404,
    list_active_notices,
    list_all_notices,
    update_notice,
)

router = APIRouter(prefix="/api/notices", tags=["notices"])


def _notice_list(notices: list[Notice]) -> ApiResponse[NoticeListData]:
    items = [NoticeOut.model_validate(notice) for notice in notices]
    return ApiResponse(results=len(items), data=NoticeListData(notices=items))


@router.get("", response_model=ApiResponse[NoticeListData])
def get_notices(db: Session = Depends(get_db)) -> ApiResponse[NoticeListData]:
    return _notice_list(list_active_notices(db))


# Registered before /{notice_id} so "admin" is not read as an id
@router.get("/admin/all", response_model=ApiResponse[NoticeListData])
def get_all_notices(_: AdminPrincipal, db: Session = Depends(get_db)) -> ApiResponse[NoticeListData]:
    return _notice_list(list_all_notices(db))


@router.get("/{notice_id}", response_model=ApiResponse[NoticeData])
def get_notice(notice_id: str, db: Session = Depends(get_db)) -> ApiResponse[NoticeData]:
    notice = get_notice_or_404(db, notice_id)
    return ApiResponse(data=NoticeData(notice=NoticeOut.model_validate(notice)))


@router.post("", response_model=ApiResponse[NoticeData], status_code=status.HTTP_201_CREATED)
def post_notice(
    payload: NoticeCreateRequest,
    principal: AdminPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[NoticeData]:
    notice = create_notice(db, payload, principal=principal)
    return ApiResponse(message="Notice created successfully", data=NoticeData(notice=NoticeOut.model_validate(notice)))


@router.put("/{notice_id}", response_model=ApiResponse[NoticeData])
def put_notice(
    notice_id: str,
    payload: NoticeUpdateRequest,
    principal: AdminPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[NoticeData]:
    notice = update_notice(db, notice_id, payload, principal=principal)
    return ApiResponse(message="Notice updated successfully", data=NoticeData(notice=NoticeOut.model_validate(notice)))


@router.delete("/{notice_id}", response_model=MessageResponse)
def remove_notice(notice_id: str, _: AdminPrincipal, db: Session = Depends(get_db)) -> MessageResponse:
    delete_notice(db, notice_id)
    return MessageResponse(message="Notice deleted successfully")
