"""Cohort gating for course enrollment.

A course with at least one active cohort is only open to users who appear in
one of those cohorts, either by user id or by the email they were
pre-registered with. The first time a pre-registered email is matched to an
account the member row is claimed for that account.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

import jwt
from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from app.core.security import decode_access_token
from app.models import Cohort, CohortMember, User

logger = logging.getLogger(__name__)

COHORT_ACCESS_DENIED_MESSAGE = "You are not in the cohort batch, please register first."
ACTIVE_MEMBER_STATUS = "active"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    status: int = 200
    message: str = ""


ALLOWED = AccessDecision(allowed=True)


def _denied(status: int, message: str) -> AccessDecision:
    return AccessDecision(allowed=False, status=status, message=message)


def normalize_email(value: str) -> str:
    return value.strip().lower()


def list_active_cohorts(db: Session, course_id: uuid.UUID | str) -> list[Cohort]:
    if not course_id:
        return []
    return list(
        db.execute(select(Cohort).where(Cohort.course_id == uuid.UUID(str(course_id)), Cohort.is_active.is_(True)))
        .scalars()
        .all()
    )


def _claim_member(db: Session, member_id: uuid.UUID, user_id: uuid.UUID, email: str) -> None:
    # A no-op when another request already claimed the row with the same values.
    result = db.execute(
        update(CohortMember)
        .where(
            CohortMember.id == member_id,
            or_(CohortMember.user_id.is_(None), CohortMember.email.is_distinct_from(email)),
        )
        .values(user_id=user_id, email=email)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount:
        logger.info("Cohort member %s claimed by user %s", member_id, user_id)


def check_cohort_access_for_user(
    db: Session,
    user_id: uuid.UUID | str,
    course_id: uuid.UUID | str,
    active_cohorts: list[Cohort] | None = None,
) -> AccessDecision:
    cohorts = active_cohorts if active_cohorts is not None else list_active_cohorts(db, course_id)
    if not cohorts:
        return ALLOWED

    user_uuid = uuid.UUID(str(user_id))
    email = db.execute(select(User.email).where(User.id == user_uuid)).scalar_one_or_none()
    if not email:
        return _denied(401, "Unauthorized")

    normalized_email = normalize_email(email)
    member = db.execute(
        select(CohortMember)
        .where(
            CohortMember.cohort_id.in_([cohort.id for cohort in cohorts]),
            CohortMember.status == ACTIVE_MEMBER_STATUS,
            or_(CohortMember.user_id == user_uuid, func.lower(CohortMember.email) == normalized_email),
        )
        .limit(1)
    ).scalars().first()

    if member is None:
        logger.info("Cohort access denied for user %s on course %s", user_uuid, course_id)
        return _denied(403, COHORT_ACCESS_DENIED_MESSAGE)

    if member.user_id is None or member.email != normalized_email:
        _claim_member(db, member.id, user_uuid, normalized_email)

    return ALLOWED


def check_cohort_access_from_token(db: Session, token: str | None, course_id: uuid.UUID | str) -> AccessDecision:
    """Gate a request that may or may not carry a bearer token.

    Courses without active cohorts are open, so the token is only inspected
    when gating applies.
    """
    cohorts = list_active_cohorts(db, course_id)
    if not cohorts:
        return ALLOWED

    if token is None:
        return _denied(401, "Authorization header is missing")
    token = token.strip()
    if not token:
        return _denied(401, "Access token is missing")

    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as exc:
        return _denied(401, str(exc) or "Invalid access token")

    subject = payload.get("sub")
    if payload.get("type") != "access" or not subject:
        return _denied(401, "Invalid access token")
    try:
        user_id = uuid.UUID(str(subject))
    except ValueError:
        return _denied(401, "Invalid access token")

    return check_cohort_access_for_user(db, user_id, course_id, active_cohorts=cohorts)
