from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lms_backend.api.deps import AdminPrincipal, CurrentPrincipal
from lms_backend.db.session import get_db
from lms_backend.schemas.auth import Role, UserData, UserOut
from lms_backend.schemas.common import ApiResponse, MessageResponse
from lms_backend.schemas.users import UserListData, UserUpdateRequest
from lms_backend.services.user_service import delete_user, ensure_self_or_admin, get_user_or_404, list_users, update_user

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=ApiResponse[UserListData])
def get_users(
    _: AdminPrincipal,
    role: Role | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse[UserListData]:
    users = [UserOut.model_validate(user) for user in list_users(db, role=role)]
    return ApiResponse(results=len(users), data=UserListData(users=users))


@router.get("/{user_id}", response_model=ApiResponse[UserData])
def get_user(user_id: str, principal: CurrentPrincipal, db: Session = Depends(get_db)) -> ApiResponse[UserData]:
    ensure_self_or_admin(principal, user_id)
    user = get_user_or_404(db, user_id)
    return ApiResponse(data=UserData(user=UserOut.model_validate(user)))


@router.put("/{user_id}", response_model=ApiResponse[UserData])
def put_user(
    user_id: str,
    payload: UserUpdateRequest,
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[UserData]:
    user = update_user(db, user_id, payload, principal=principal)
    return ApiResponse(message="User updated successfully", data=UserData(user=UserOut.model_validate(user)))


@router.delete("/{user_id}", response_model=MessageResponse)
def remove_user(user_id: str, principal: AdminPrincipal, db: Session = Depends(get_db)) -> MessageResponse:
    delete_user(db, user_id, principal=principal)
    return MessageResponse(message="User deleted successfully")
