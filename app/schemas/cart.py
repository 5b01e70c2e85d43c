from pydantic import Field

from app.schemas.base import CamelModel


class CartCourseIn(CamelModel):
    id: str = Field(min_length=1, max_length=255)
    title: str = Field(min_length=1)
    price: int = Field(ge=0)
    description: str | None = None
    instructor: str | None = None
    duration: str | None = None
    rating: float | None = None
    students: int | None = None
    level: str | None = None
    thumbnail: str | None = None


class CartItemOut(CamelModel):
    course_id: str
    title: str
    price: int
    added_at: str
    description: str | None = None
    instructor: str | None = None
    duration: str | None = None
    rating: float | None = None
    students: int | None = None
    level: str | None = None
    thumbnail: str | None = None


class CartResponse(CamelModel):
    items: list[CartItemOut]
