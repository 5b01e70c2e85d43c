import uuid

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import CurrentUser, get_bearer_token
from app.core.error_codes import ErrorCode
from app.core.errors import ApiError
from app.db.session import get_db
from app.models import Course
from app.schemas.courses import (
    CourseDetailResponse,
    CourseListResponse,
    CourseOut,
    EnrollRequest,
    EnrollResponse,
)
from app.services.cohort_access import check_cohort_access_for_user, check_cohort_access_from_token
from app.services.course_resolver import CourseResolver, get_course_resolver
from app.services.enrollment_service import ensure_enrollment

router = APIRouter(prefix="/v1/courses", tags=["courses"])


def course_out(course: Course) -> CourseOut:
    price_cents = course.price_cents or 0
    return CourseOut(
        id=str(course.id),
        slug=course.slug,
        title=course.course_name,
        description=course.description,
        price=(price_cents + 50) // 100,
        price_cents=price_cents,
        created_at=course.created_at.isoformat(),
    )


@router.get("", response_model=CourseListResponse)
def list_courses(db: Session = Depends(get_db)) -> CourseListResponse:
    courses = db.execute(select(Course).order_by(Course.created_at.asc())).scalars().all()
    return CourseListResponse(courses=[course_out(course) for course in courses])


@router.get("/{course_key}", response_model=CourseDetailResponse)
def get_course(
    course_key: str,
    db: Session = Depends(get_db),
    resolver: CourseResolver = Depends(get_course_resolver),
) -> CourseDetailResponse:
    course_id = resolver.resolve(db, course_key)
    course = db.get(Course, uuid.UUID(course_id))
    if not course:
        raise ApiError(status_code=404, code=ErrorCode.COURSE_NOT_FOUND, message="Course not found")
    return CourseDetailResponse(course=course_out(course))


@router.get("/{course_key}/access", status_code=status.HTTP_204_NO_CONTENT)
def check_course_access(
    course_key: str,
    token: str | None = Depends(get_bearer_token),
    db: Session = Depends(get_db),
    resolver: CourseResolver = Depends(get_course_resolver),
) -> Response:
    course_id = resolver.resolve(db, course_key)
    decision = check_cohort_access_from_token(db, token, course_id)
    if not decision.allowed:
        raise ApiError(status_code=decision.status, code=_denial_code(decision.status), message=decision.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{course_key}/enroll", response_model=EnrollResponse)
def enroll(
    course_key: str,
    current_user: CurrentUser,
    check_only: str | None = Query(default=None, alias="checkOnly"),
    payload: EnrollRequest | None = Body(default=None),
    db: Session = Depends(get_db),
    resolver: CourseResolver = Depends(get_course_resolver),
):
    course_id = resolver.resolve(db, course_key)
    if db.get(Course, uuid.UUID(course_id)) is None:
        raise ApiError(status_code=404, code=ErrorCode.COURSE_NOT_FOUND, message="Course not found")

    decision = check_cohort_access_for_user(db, current_user.id, course_id)
    if not decision.allowed:
        raise ApiError(status_code=decision.status, code=_denial_code(decision.status), message=decision.message)

    if check_only == "true" or (payload is not None and payload.check_only):
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    ensure_enrollment(db, current_user.id, course_id)
    return EnrollResponse(status="enrolled", course_id=course_id)


def _denial_code(status_code: int) -> str:
    return ErrorCode.UNAUTHORIZED if status_code == 401 else ErrorCode.COHORT_ACCESS_DENIED
