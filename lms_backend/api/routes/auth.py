from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lms_backend.api.deps import CurrentPrincipal
from lms_backend.db.session import get_db
from lms_backend.schemas.auth import AuthData, LoginRequest, ProfileUpdateRequest, RegisterRequest, UserData, UserOut
from lms_backend.schemas.common import ApiResponse
from lms_backend.services.auth_service import login_user, register_user
from lms_backend.services.user_service import get_user_or_404, update_profile

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> ApiResponse[AuthData]:
    return ApiResponse(message="User registered successfully", data=register_user(db, payload))


@router.post("/login", response_model=ApiResponse[AuthData])
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> ApiResponse[AuthData]:
    return ApiResponse(message="Login successful", data=login_user(db, payload))


@router.get("/profile", response_model=ApiResponse[UserData])
def get_profile(principal: CurrentPrincipal, db: Session = Depends(get_db)) -> ApiResponse[UserData]:
    user = get_user_or_404(db, principal.id)
    return ApiResponse(data=UserData(user=UserOut.model_validate(user)))


@router.put("/profile", response_model=ApiResponse[UserData])
def put_profile(
    payload: ProfileUpdateRequest,
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[UserData]:
    user = update_profile(db, principal.id, payload)
    return ApiResponse(message="Profile updated successfully", data=UserData(user=UserOut.model_validate(user)))
