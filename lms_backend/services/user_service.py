import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from lms_backend.core.security import Principal, hash_password
from lms_backend.models import User
from lms_backend.schemas.auth import ProfileUpdateRequest
from lms_backend.schemas.users import UserUpdateRequest

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "first_name", "last_name", "bio", "profile_image")


def get_user_or_404(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found", code=ErrorCode.USER_NOT_FOUND)
    return user


def list_users(db: Session, role: str | None = None) -> list[User]:
    stmt = select(User)
    if role:
        stmt = stmt.where(User.role == role)
    return list(db.execute(stmt.order_by(User.created_at.desc())).scalars().all())


def ensure_self_or_admin(principal: Principal, user_id: str) -> None:
    if principal.id != user_id and not principal.is_admin:
        raise ForbiddenError("You can only access your own account")


def _apply_profile_fields(user: User, changes: dict) -> None:
    for field in PROFILE_FIELDS:
        value = changes.get(field)
        if value is not None:
            setattr(user, field, value.strip())


def update_profile(db: Session, user_id: str, payload: ProfileUpdateRequest) -> User:
    user = get_user_or_404(db, user_id)
    _apply_profile_fields(user, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(user)
    logger.info("Profile updated: %s", user_id)
    return user


def update_user(db: Session, user_id: str, payload: UserUpdateRequest, *, principal: Principal) -> User:
    ensure_self_or_admin(principal, user_id)
    user = get_user_or_404(db, user_id)
    changes = payload.model_dump(exclude_unset=True)

    role = changes.get("role")
    if role is not None and not principal.is_admin:
        raise ForbiddenError("Only admins can change roles")

    email = changes.get("email")
    if email is not None:
        email = email.lower().strip()
        taken = db.execute(select(User.id).where(User.email == email, User.id != user.id)).scalar_one_or_none()
        if taken:
            raise ConflictError("User with this email already exists", code=ErrorCode.EMAIL_ALREADY_REGISTERED)
        user.email = email

    _apply_profile_fields(user, changes)

    if changes.get("password"):
        user.password_hash = hash_password(changes["password"])

    if role is not None:
        user.role = role

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("User with this email already exists", code=ErrorCode.EMAIL_ALREADY_REGISTERED) from exc
    db.refresh(user)

    logger.info("User updated: %s by %s", user_id, principal.id)
    return user


def delete_user(db: Session, user_id: str, *, principal: Principal) -> None:
    if user_id == principal.id:
        raise ValidationError("You cannot delete your own account", code=ErrorCode.CANNOT_DELETE_SELF)

    user = get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User deleted: %s by %s", user_id, principal.id)
