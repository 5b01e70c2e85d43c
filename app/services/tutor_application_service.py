import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import TutorApplication
from app.schemas.tutor_applications import TutorApplicationCreateRequest
from app.services.cohort_access import normalize_email

logger = logging.getLogger(__name__)

PENDING_APPLICATION_STATUS = "pending"
APPROVED_APPLICATION_STATUS = "approved"


def submit_tutor_application(db: Session, payload: TutorApplicationCreateRequest) -> TutorApplication:
    phone = (payload.phone or "").strip()
    application = TutorApplication(
        full_name=payload.full_name.strip(),
        email=normalize_email(str(payload.email)),
        phone=phone or None,
        headline=payload.headline.strip(),
        course_title=payload.course_title.strip(),
        course_description=payload.course_description.strip(),
        target_audience=payload.target_audience.strip(),
        expertise_area=payload.expertise_area.strip(),
        experience_years=payload.experience_years,
        availability=payload.availability.strip(),
        status=PENDING_APPLICATION_STATUS,
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    logger.info("Tutor application %s submitted by %s", application.id, application.email)
    return application


def list_tutor_applications(db: Session) -> list[TutorApplication]:
    return list(
        db.execute(select(TutorApplication).order_by(TutorApplication.created_at.desc(), TutorApplication.id.desc()))
        .scalars()
        .all()
    )
