from pydantic import StrictBool

from app.schemas.base import CamelModel


class CourseOut(CamelModel):
    id: str
    slug: str
    title: str
    description: str = ""
    price: int
    price_cents: int
    created_at: str


class CourseListResponse(CamelModel):
    courses: list[CourseOut]


class CourseDetailResponse(CamelModel):
    course: CourseOut


class EnrollRequest(CamelModel):
    check_only: StrictBool = False


class EnrollResponse(CamelModel):
    status: str
    course_id: str


class MyCourseItem(CamelModel):
    course: CourseOut
    status: str
    joined_at: str


class MyCoursesResponse(CamelModel):
    courses: list[MyCourseItem]
