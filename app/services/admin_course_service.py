from __future__ import annotations

import logging
import re
import secrets
import uuid
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import ApiError
from app.models import Cohort, CohortMember, Course, CourseTutor, TutorApplication, User
from app.schemas.admin import AdminCourseCreateRequest, CohortCreateRequest, CohortUpdateRequest
from app.services.cohort_access import ACTIVE_MEMBER_STATUS, normalize_email
from app.services.tutor_application_service import APPROVED_APPLICATION_STATUS

logger = logging.getLogger(__name__)

TUTOR_ROLE = "tutor"
COURSE_OWNER_ROLE = "owner"

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str, fallback: str) -> str:
    slug = _NON_SLUG_RE.sub("-", value.lower()).strip("-")
    return slug or fallback


def create_course(db: Session, payload: AdminCourseCreateRequest) -> Course:
    name = payload.course_name.strip()
    slug = slugify(payload.slug or name, f"course-{secrets.token_hex(4)}")
    course = Course(
        course_name=name,
        slug=slug,
        description=payload.description.strip(),
        price_cents=payload.price_cents,
    )
    db.add(course)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ApiError(status_code=409, code=ErrorCode.COURSE_CONFLICT, message="Course slug already exists") from exc
    db.refresh(course)
    return course


def get_course_or_404(db: Session, course_id: str) -> Course:
    course = db.get(Course, uuid.UUID(course_id))
    if not course:
        raise ApiError(status_code=404, code=ErrorCode.COURSE_NOT_FOUND, message="Course not found")
    return course


def get_cohort_or_404(db: Session, cohort_id: str) -> Cohort:
    try:
        cohort_uuid = uuid.UUID(cohort_id)
    except ValueError as exc:
        raise ApiError(status_code=404, code=ErrorCode.COHORT_NOT_FOUND, message="Cohort not found") from exc
    cohort = db.get(Cohort, cohort_uuid)
    if not cohort:
        raise ApiError(status_code=404, code=ErrorCode.COHORT_NOT_FOUND, message="Cohort not found")
    return cohort


def create_cohort(db: Session, course: Course, payload: CohortCreateRequest) -> Cohort:
    cohort = Cohort(course_id=course.id, name=payload.name.strip(), is_active=payload.is_active)
    db.add(cohort)
    db.commit()
    db.refresh(cohort)
    logger.info("Cohort %s (%s) created for course %s", cohort.id, cohort.name, course.id)
    return cohort


def update_cohort(db: Session, cohort_id: str, payload: CohortUpdateRequest) -> Cohort:
    cohort = get_cohort_or_404(db, cohort_id)
    if payload.name is not None:
        cohort.name = payload.name.strip()
    if payload.is_active is not None:
        cohort.is_active = payload.is_active
    db.commit()
    db.refresh(cohort)
    return cohort


def list_cohort_members(db: Session, cohort_id: uuid.UUID) -> list[CohortMember]:
    return list(
        db.execute(
            select(CohortMember).where(CohortMember.cohort_id == cohort_id).order_by(CohortMember.created_at.asc())
        )
        .scalars()
        .all()
    )


def add_cohort_members(db: Session, cohort: Cohort, emails: list[str]) -> int:
    """Pre-register emails in a cohort. Emails already present are left untouched."""
    wanted = list(dict.fromkeys(normalize_email(email) for email in emails if email.strip()))
    if not wanted:
        return 0

    existing = set(
        db.execute(
            select(func.lower(CohortMember.email)).where(
                CohortMember.cohort_id == cohort.id,
                func.lower(CohortMember.email).in_(wanted),
            )
        )
        .scalars()
        .all()
    )
    new_emails = [email for email in wanted if email not in existing]
    db.add_all(
        [CohortMember(cohort_id=cohort.id, email=email, status=ACTIVE_MEMBER_STATUS) for email in new_emails]
    )
    db.commit()
    logger.info("Pre-registered %d member(s) in cohort %s", len(new_emails), cohort.id)
    return len(new_emails)


@dataclass(frozen=True)
class TutorApproval:
    application: TutorApplication
    user: User | None = None
    course: Course | None = None
    already_approved: bool = False


def get_tutor_application_or_404(db: Session, application_id: str) -> TutorApplication:
    try:
        application_uuid = uuid.UUID(application_id)
    except ValueError as exc:
        raise ApiError(status_code=404, code=ErrorCode.APPLICATION_NOT_FOUND, message="Application not found") from exc
    application = db.get(TutorApplication, application_uuid)
    if not application:
        raise ApiError(status_code=404, code=ErrorCode.APPLICATION_NOT_FOUND, message="Application not found")
    return application


def _course_title_for(application: TutorApplication) -> str:
    return (
        application.course_title.strip()
        or application.course_description[:64].strip()
        or f"{application.full_name.strip()}'s Course"
    )


def approve_tutor_application(db: Session, application_id: str) -> TutorApproval:
    """Turn an application into a tutor account that owns a course.

    Repeat calls on an approved application change nothing.
    """
    application = get_tutor_application_or_404(db, application_id)
    if application.status == APPROVED_APPLICATION_STATUS:
        return TutorApproval(application=application, already_approved=True)

    email = normalize_email(application.email)
    full_name = application.full_name.strip()
    user = db.execute(select(User).where(func.lower(User.email) == email)).scalars().first()
    if user is None:
        user = User(email=email, full_name=full_name, role=TUTOR_ROLE)
        db.add(user)
    else:
        user.full_name = full_name
        user.role = TUTOR_ROLE

    title = _course_title_for(application)
    slug = slugify(title, f"course-{secrets.token_hex(4)}")
    description = application.course_description.strip() or "Course description to be provided by tutor."
    course = db.execute(select(Course).where(Course.slug == slug)).scalars().first()
    if course is None:
        course = Course(course_name=title, slug=slug, description=description, price_cents=0)
        db.add(course)
    else:
        course.course_name = title
        course.description = description
    db.flush()

    link = db.execute(
        select(CourseTutor).where(CourseTutor.course_id == course.id, CourseTutor.user_id == user.id)
    ).scalars().first()
    if link is None:
        db.add(CourseTutor(course_id=course.id, user_id=user.id, role=COURSE_OWNER_ROLE, is_active=True))
    else:
        link.role = COURSE_OWNER_ROLE
        link.is_active = True

    application.status = APPROVED_APPLICATION_STATUS
    application.user_id = user.id
    application.course_id = course.id
    db.commit()
    logger.info("Tutor application %s approved: user %s owns course %s", application.id, user.id, course.id)
    return TutorApproval(application=application, user=user, course=course)
