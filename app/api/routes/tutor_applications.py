from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models import TutorApplication
from app.schemas.tutor_applications import (
    TutorApplicationCreateRequest,
    TutorApplicationOut,
    TutorApplicationResponse,
)
from app.services.tutor_application_service import submit_tutor_application

router = APIRouter(prefix="/v1/tutor-applications", tags=["tutor-applications"])


def application_out(application: TutorApplication) -> TutorApplicationOut:
    return TutorApplicationOut(
        id=str(application.id),
        full_name=application.full_name,
        email=application.email,
        phone=application.phone,
        headline=application.headline,
        course_title=application.course_title,
        course_description=application.course_description,
        target_audience=application.target_audience,
        expertise_area=application.expertise_area,
        experience_years=application.experience_years,
        availability=application.availability,
        status=application.status,
        course_id=str(application.course_id) if application.course_id else None,
        created_at=application.created_at.isoformat(),
    )


@router.post("", response_model=TutorApplicationResponse, status_code=201)
def submit_application(payload: TutorApplicationCreateRequest, db: Session = Depends(get_db)) -> TutorApplicationResponse:
    return TutorApplicationResponse(application=application_out(submit_tutor_application(db, payload)))
