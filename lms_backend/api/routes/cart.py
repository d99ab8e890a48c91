from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms_backend.api.deps import CurrentPrincipal
from lms_backend.db.session import get_db
from lms_backend.schemas.cart import AddToCartRequest, CartData
from lms_backend.schemas.common import ApiResponse
from lms_backend.services.cart_service import add_to_cart, clear_cart, get_cart, remove_from_cart

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=ApiResponse[CartData])
def read_cart(principal: CurrentPrincipal, db: Session = Depends(get_db)) -> ApiResponse[CartData]:
    return ApiResponse(data=CartData(cart=get_cart(db, principal.id)))


@router.post("", response_model=ApiResponse[CartData])
def post_cart_item(
    payload: AddToCartRequest,
    principal: CurrentPrincipal,
    db: Session = Depends(get_db),
) -> ApiResponse[CartData]:
    cart = add_to_cart(db, principal.id, payload)
    return ApiResponse(message="Course added to cart", data=CartData(cart=cart))


@router.delete("/{course_id}", response_model=ApiResponse[CartData])
def delete_cart_item(course_id: str, principal: CurrentPrincipal, db: Session = Depends(get_db)) -> ApiResponse[CartData]:
    cart = remove_from_cart(db, principal.id, course_id)
    return ApiResponse(message="Course removed from cart", data=CartData(cart=cart))


@router.delete("", response_model=ApiResponse[CartData])
def delete_cart(principal: CurrentPrincipal, db: Session = Depends(get_db)) -> ApiResponse[CartData]:
    cart = clear_cart(db, principal.id)
    return ApiResponse(message="Cart cleared successfully", data=CartData(cart=cart))
