import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import NotFoundError
from lms_backend.core.security import Principal
from lms_backend.models import Notice
from lms_backend.schemas.notices import NoticeCreateRequest, NoticeUpdateRequest

logger = logging.getLogger(__name__)


def list_active_notices(db: Session) -> list[Notice]:
    """Active notices, highest priority first, newest first within a priority."""
    return list(
        db.execute(
            select(Notice)
            .where(Notice.is_active.is_(True))
            .order_by(Notice.priority.desc(), Notice.created_at.desc())
        ).scalars().all()
    )


def list_all_notices(db: Session) -> list[Notice]:
    return list(db.execute(select(Notice).order_by(Notice.created_at.desc())).scalars().all())


def get_notice_or_404(db: Session, notice_id: str) -> Notice:
    notice = db.get(Notice, notice_id)
    if not notice:
        raise NotFoundError("Notice not found", code=ErrorCode.NOTICE_NOT_FOUND)
    return notice


def create_notice(db: Session, payload: NoticeCreateRequest, *, principal: Principal) -> Notice:
    notice = Notice(
        title=payload.title.strip(),
        content=payload.content.strip(),
        type=payload.type,
        priority=payload.priority,
        is_active=payload.is_active,
        created_by=principal.id,
        created_by_name=principal.name,
    )
    db.add(notice)
    db.commit()
    db.refresh(notice)
    logger.info("Notice created: %s", notice.id)
    return notice


def update_notice(db: Session, notice_id: str, payload: NoticeUpdateRequest, *, principal: Principal) -> Notice:
    notice = get_notice_or_404(db, notice_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(notice, field, value.strip() if isinstance(value, str) else value)
    notice.updated_by = principal.id
    notice.updated_by_name = principal.name
    db.commit()
    db.refresh(notice)
    logger.info("Notice updated: %s", notice_id)
    return notice


def delete_notice(db: Session, notice_id: str) -> None:
    notice = get_notice_or_404(db, notice_id)
    db.delete(notice)
    db.commit()
    logger.info("Notice deleted: %s", notice_id)
