from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import CurrentUser
from app.db.session import get_db
from app.models import CartItem
from app.schemas.cart import CartCourseIn, CartItemOut, CartResponse
from app.services.cart_service import add_item_to_cart, clear_cart_for_user, get_cart_for_user, remove_item_from_cart

router = APIRouter(prefix="/v1/cart", tags=["cart"])


def _cart_response(items: list[CartItem]) -> CartResponse:
    return CartResponse(
        items=[
            CartItemOut(
                course_id=item.course_slug,
                title=item.course_title,
                price=item.course_price,
                added_at=item.added_at.isoformat(),
                **(item.course_data or {}),
            )
            for item in items
        ]
    )


@router.get("", response_model=CartResponse, response_model_exclude_none=True)
def get_cart(current_user: CurrentUser, db: Session = Depends(get_db)) -> CartResponse:
    return _cart_response(get_cart_for_user(db, current_user.id))


@router.post("/items", response_model=CartResponse, response_model_exclude_none=True)
def add_cart_item(payload: CartCourseIn, current_user: CurrentUser, db: Session = Depends(get_db)) -> CartResponse:
    return _cart_response(add_item_to_cart(db, current_user.id, payload))


@router.delete("/items/{course_slug}", response_model=CartResponse, response_model_exclude_none=True)
def remove_cart_item(course_slug: str, current_user: CurrentUser, db: Session = Depends(get_db)) -> CartResponse:
    return _cart_response(remove_item_from_cart(db, current_user.id, course_slug))


@router.delete("", response_model=CartResponse)
def clear_cart(current_user: CurrentUser, db: Session = Depends(get_db)) -> CartResponse:
    return _cart_response(clear_cart_for_user(db, current_user.id))
