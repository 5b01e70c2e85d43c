from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class AdminCourseCreateRequest(CamelModel):
    course_name: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str = ""
    price_cents: int = Field(default=0, ge=0)


class AdminCourseResponse(CamelModel):
    id: str
    course_name: str
    slug: str
    description: str
    price_cents: int
    created_at: str


class CohortCreateRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    is_active: bool = True


class CohortUpdateRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None


class CohortResponse(CamelModel):
    id: str
    course_id: str
    name: str
    is_active: bool
    created_at: str


class CohortMembersAddRequest(CamelModel):
    emails: list[EmailStr] = Field(min_length=1, max_length=1000)


class CohortMemberOut(CamelModel):
    id: str
    email: str | None
    user_id: str | None
    status: str


class CohortMembersResponse(CamelModel):
    cohort_id: str
    members: list[CohortMemberOut]
    added: int = 0
