import logging

from sqlalchemy.orm import Session

from lms_backend.core.error_codes import ErrorCode
from lms_backend.core.errors import ConflictError
from lms_backend.core.security import now_utc
from lms_backend.schemas.cart import AddToCartRequest, CartItem
from lms_backend.services.user_service import get_user_or_404

logger = logging.getLogger(__name__)


def get_cart(db: Session, user_id: str) -> list[dict]:
    user = get_user_or_404(db, user_id)
    return list(user.cart or [])


def add_to_cart(db: Session, user_id: str, payload: AddToCartRequest) -> list[dict]:
    user = get_user_or_404(db, user_id)
    cart = list(user.cart or [])

    if any(item.get("id") == payload.course_id for item in cart):
        raise ConflictError("Course already in cart", code=ErrorCode.CART_ITEM_EXISTS)

    item = CartItem(
        id=payload.course_id,
        title=payload.title,
        instructor=payload.instructor or "Course Instructor",
        price=payload.price,
        image=payload.image or "",
        duration=payload.duration or "N/A",
        level=payload.level or "All levels",
        added_at=now_utc(),
    )
    user.cart = [*cart, item.model_dump(by_alias=True, mode="json")]
    db.commit()

    logger.info("Course %s added to cart for user %s", payload.course_id, user_id)
    return list(user.cart)


def remove_from_cart(db: Session, user_id: str, course_id: str) -> list[dict]:
    user = get_user_or_404(db, user_id)
    cart = list(user.cart or [])
    remaining = [item for item in cart if item.get("id") != course_id]

    if len(remaining) != len(cart):
        user.cart = remaining
        db.commit()
        logger.info("Course %s removed from cart for user %s", course_id, user_id)
    return remaining


def clear_cart(db: Session, user_id: str) -> list[dict]:
    user = get_user_or_404(db, user_id)
    user.cart = []
    db.commit()
    logger.info("Cart cleared for user %s", user_id)
    return []
