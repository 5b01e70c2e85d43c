import uuid
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import now_utc
from app.models import CartItem
from app.schemas.cart import CartCourseIn

METADATA_KEYS = ("description", "instructor", "duration", "rating", "students", "level", "thumbnail")


def extract_metadata(payload: CartCourseIn) -> dict[str, Any]:
    metadata: dict[str, Any] = {}
    for key in METADATA_KEYS:
        value = getattr(payload, key, None)
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            metadata[key] = value
    return metadata


def get_cart_for_user(db: Session, user_id: uuid.UUID) -> list[CartItem]:
    return list(
        db.execute(select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.added_at.desc()))
        .scalars()
        .all()
    )


def _apply(item: CartItem, payload: CartCourseIn) -> None:
    item.course_title = payload.title
    item.course_price = payload.price
    item.course_data = extract_metadata(payload)
    item.added_at = now_utc()


def add_item_to_cart(db: Session, user_id: uuid.UUID, payload: CartCourseIn) -> list[CartItem]:
    item = db.execute(
        select(CartItem).where(CartItem.user_id == user_id, CartItem.course_slug == payload.id)
    ).scalars().first()
    if item is None:
        item = CartItem(user_id=user_id, course_slug=payload.id)
        db.add(item)
    _apply(item, payload)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        item = db.execute(
            select(CartItem).where(CartItem.user_id == user_id, CartItem.course_slug == payload.id)
        ).scalars().one()
        _apply(item, payload)
        db.commit()

    return get_cart_for_user(db, user_id)


def remove_item_from_cart(db: Session, user_id: uuid.UUID, course_slug: str) -> list[CartItem]:
    db.execute(delete(CartItem).where(CartItem.user_id == user_id, CartItem.course_slug == course_slug))
    db.commit()
    return get_cart_for_user(db, user_id)


def clear_cart_for_user(db: Session, user_id: uuid.UUID) -> list[CartItem]:
    db.execute(delete(CartItem).where(CartItem.user_id == user_id))
    db.commit()
    return []
