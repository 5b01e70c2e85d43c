from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import CurrentUser
from app.api.routes.courses import course_out
from app.db.session import get_db
from app.schemas.courses import MyCourseItem, MyCoursesResponse
from app.schemas.users import MeResponse, UserOut
from app.services.enrollment_service import list_active_enrollments

router = APIRouter(prefix="/v1", tags=["users"])


@router.get("/me", response_model=MeResponse)
def me(current_user: CurrentUser) -> MeResponse:
    return MeResponse(
        user=UserOut(
            id=str(current_user.id),
            email=current_user.email,
            full_name=current_user.full_name,
            created_at=current_user.created_at.isoformat(),
        )
    )


@router.get("/me/courses", response_model=MyCoursesResponse)
def list_my_courses(current_user: CurrentUser, db: Session = Depends(get_db)) -> MyCoursesResponse:
    rows = list_active_enrollments(db, current_user.id)
    return MyCoursesResponse(
        courses=[
            MyCourseItem(course=course_out(course), status=enrollment.status, joined_at=enrollment.joined_at.isoformat())
            for enrollment, course in rows
        ]
    )
