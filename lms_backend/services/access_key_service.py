"""Access-key management and redemption.

Redemption validates a key against its business rules and then, in a single
transaction, bumps the usage counter, appends a grant record and enrolls the
user. The key row (and the user row, when enrolling) are locked with
SELECT ... FOR UPDATE on databases that support it, so concurrent redemptions
of the same key serialize instead of losing an increment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from lms_backend.core.security import ensure_utc, now_utc
from lms_backend.models import AccessKey, User, UserCourseAccess
from lms_backend.schemas.access_keys import AccessKeyCreateRequest, AccessKeyUpdateRequest

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"


@dataclass(frozen=True)
class RedemptionResult:
    course_id: str
    access_granted: bool = True


def check_redeemable(access_key: AccessKey, now: datetime) -> None:
    if not access_key.is_active:
        raise ForbiddenError("This access key is no longer active", code=ErrorCode.ACCESS_KEY_INACTIVE)

    if access_key.expiry_date is not None and ensure_utc(access_key.expiry_date) < now:
        raise ForbiddenError("This access key has expired", code=ErrorCode.ACCESS_KEY_EXPIRED)

    if access_key.max_uses is not None and access_key.current_uses >= access_key.max_uses:
        raise ForbiddenError(
            "This access key has reached its maximum usage limit",
            code=ErrorCode.ACCESS_KEY_USAGE_EXCEEDED,
        )


def _enroll(db: Session, *, user_id: str, course_id: str) -> bool:
    user = db.get(User, user_id, with_for_update=True, populate_existing=True)
    if user is None:
        logger.warning("Redemption for unknown user %s on course %s: grant recorded, no enrollment", user_id, course_id)
        return False

    enrolled = list(user.enrolled_courses or [])
    if course_id in enrolled:
        return False

    # Assign a new list so the JSON column is flagged dirty
    user.enrolled_courses = [*enrolled, course_id]
    return True


def redeem_access_key(db: Session, *, key: str, course_id: str, user_id: str | None = None) -> RedemptionResult:
    if not key or not course_id:
        raise ValidationError("Key and courseId are required")

    try:
        access_key = db.execute(
            select(AccessKey)
            .where(AccessKey.key == key, AccessKey.course_id == course_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalars().first()
        if access_key is None:
            raise NotFoundError("Invalid access key", code=ErrorCode.ACCESS_KEY_NOT_FOUND)

        now = now_utc()
        check_redeemable(access_key, now)

        access_key.current_uses = (access_key.current_uses or 0) + 1
        access_key.last_used_at = now
        access_key.last_used_by = user_id or ANONYMOUS_USER

        enrolled = False
        if user_id:
            db.add(
                UserCourseAccess(
                    user_id=user_id,
                    course_id=course_id,
                    access_key_id=access_key.id,
                    key=access_key.key,
                    granted_at=now,
                )
            )
            enrolled = _enroll(db, user_id=user_id, course_id=course_id)

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Access key redeemed: key=%s course=%s user=%s uses=%s newly_enrolled=%s",
        key,
        course_id,
        user_id or ANONYMOUS_USER,
        access_key.current_uses,
        enrolled,
    )
    return RedemptionResult(course_id=access_key.course_id)


def list_access_keys(db: Session, course_id: str | None = None) -> list[AccessKey]:
    stmt = select(AccessKey)
    if course_id:
        stmt = stmt.where(AccessKey.course_id == course_id)
    return list(db.execute(stmt.order_by(AccessKey.created_at.desc())).scalars().all())


def get_access_key_or_404(db: Session, access_key_id: str) -> AccessKey:
    access_key = db.get(AccessKey, access_key_id)
    if not access_key:
        raise NotFoundError("Access key not found", code=ErrorCode.ACCESS_KEY_NOT_FOUND)
    return access_key


def _key_taken(db: Session, key: str, exclude_id: str | None = None) -> bool:
    stmt = select(AccessKey.id).where(AccessKey.key == key)
    if exclude_id:
        stmt = stmt.where(AccessKey.id != exclude_id)
    return db.execute(stmt.limit(1)).scalar_one_or_none() is not None


def create_access_key(db: Session, payload: AccessKeyCreateRequest, *, created_by: str | None = None) -> AccessKey:
    key = payload.key
    if _key_taken(db, key):
        raise ConflictError("This access key already exists", code=ErrorCode.ACCESS_KEY_EXISTS)

    access_key = AccessKey(
        key=key,
        course_id=payload.course_id,
        expiry_date=ensure_utc(payload.expiry_date) if payload.expiry_date else None,
        max_uses=payload.max_uses or None,
        current_uses=0,
        is_active=payload.is_active,
        created_by=created_by,
    )
    db.add(access_key)
    try:
        db.commit()
    except IntegrityError as exc:
        # Unique index caught a concurrent creation of the same key
        db.rollback()
        raise ConflictError("This access key already exists", code=ErrorCode.ACCESS_KEY_EXISTS) from exc

    db.refresh(access_key)
    logger.info("Access key created: %s (course %s)", access_key.id, access_key.course_id)
    return access_key


def update_access_key(db: Session, access_key_id: str, payload: AccessKeyUpdateRequest) -> AccessKey:
    access_key = get_access_key_or_404(db, access_key_id)
    changes = payload.model_dump(exclude_unset=True)

    max_uses = changes.get("max_uses") or None
    if max_uses is not None and max_uses < access_key.current_uses:
        raise ValidationError(f"maxUses cannot be lower than currentUses ({access_key.current_uses})")

    new_key = changes.get("key")
    if new_key is not None:
        if new_key != access_key.key and _key_taken(db, new_key, exclude_id=access_key.id):
            raise ConflictError("This access key already exists", code=ErrorCode.ACCESS_KEY_EXISTS)
        access_key.key = new_key

    if changes.get("course_id") is not None:
        access_key.course_id = changes["course_id"]
    if changes.get("is_active") is not None:
        access_key.is_active = changes["is_active"]
    if "expiry_date" in changes:
        expiry = changes["expiry_date"]
        access_key.expiry_date = ensure_utc(expiry) if expiry else None
    if "max_uses" in changes:
        access_key.max_uses = max_uses

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("This access key already exists", code=ErrorCode.ACCESS_KEY_EXISTS) from exc

    db.refresh(access_key)
    logger.info("Access key updated: %s", access_key.id)
    return access_key


def delete_access_key(db: Session, access_key_id: str) -> None:
    access_key = get_access_key_or_404(db, access_key_id)
    db.delete(access_key)
    db.commit()
    logger.info("Access key deleted: %s", access_key_id)


def list_user_grants(db: Session, user_id: str) -> list[UserCourseAccess]:
    return list(
        db.execute(
            select(UserCourseAccess)
            .where(UserCourseAccess.user_id == user_id)
            .order_by(UserCourseAccess.granted_at.desc())
        ).scalars().all()
    )
