from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class TutorApplicationCreateRequest(CamelModel):
    full_name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=64)
    headline: str = Field(default="", max_length=255)
    course_title: str = Field(default="", max_length=255)
    course_description: str = ""
    target_audience: str = ""
    expertise_area: str = ""
    experience_years: int = Field(default=0, ge=0, le=80)
    availability: str = ""


class TutorApplicationOut(CamelModel):
    id: str
    full_name: str
    email: str
    phone: str | None = None
    headline: str
    course_title: str
    course_description: str
    target_audience: str
    expertise_area: str
    experience_years: int
    availability: str
    status: str
    course_id: str | None = None
    created_at: str


class TutorApplicationResponse(CamelModel):
    application: TutorApplicationOut


class TutorApplicationListResponse(CamelModel):
    applications: list[TutorApplicationOut]


class ApprovedTutorOut(CamelModel):
    user_id: str
    full_name: str
    email: str


class ApprovedCourseOut(CamelModel):
    course_id: str
    slug: str
    title: str


class TutorApprovalResponse(CamelModel):
    message: str
    tutor: ApprovedTutorOut | None = None
    course: ApprovedCourseOut | None = None
