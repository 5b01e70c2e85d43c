import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Course, Enrollment

logger = logging.getLogger(__name__)

ACTIVE_ENROLLMENT_STATUS = "active"


def _find_enrollment(db: Session, user_id: uuid.UUID, course_id: uuid.UUID) -> Enrollment | None:
    return db.execute(
        select(Enrollment).where(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
    ).scalars().first()


def ensure_enrollment(db: Session, user_id: uuid.UUID | str, course_id: uuid.UUID | str) -> Enrollment | None:
    """Insert or reactivate the (user, course) enrollment; safe to call repeatedly."""
    if not user_id or not course_id:
        return None
    user_uuid = uuid.UUID(str(user_id))
    course_uuid = uuid.UUID(str(course_id))

    enrollment = _find_enrollment(db, user_uuid, course_uuid)
    if enrollment:
        if enrollment.status != ACTIVE_ENROLLMENT_STATUS:
            enrollment.status = ACTIVE_ENROLLMENT_STATUS
            db.commit()
        return enrollment

    enrollment = Enrollment(user_id=user_uuid, course_id=course_uuid, status=ACTIVE_ENROLLMENT_STATUS)
    db.add(enrollment)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the row first
        db.rollback()
        enrollment = _find_enrollment(db, user_uuid, course_uuid)
        if enrollment is None:
            raise
        enrollment.status = ACTIVE_ENROLLMENT_STATUS
        db.commit()
        return enrollment

    db.refresh(enrollment)
    logger.info("User %s enrolled in course %s", user_uuid, course_uuid)
    return enrollment


def list_active_enrollments(db: Session, user_id: uuid.UUID) -> list[tuple[Enrollment, Course]]:
    stmt = (
        select(Enrollment, Course)
        .join(Course, Enrollment.course_id == Course.id)
        .where(Enrollment.user_id == user_id, Enrollment.status == ACTIVE_ENROLLMENT_STATUS)
        .order_by(Enrollment.joined_at.desc())
    )
    return [(enrollment, course) for enrollment, course in db.execute(stmt).all()]
