import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Cohort, Course

logger = logging.getLogger(__name__)

# Id referenced by the legacy "ai-in-web-development" slug
AI_WEB_DEV_COURSE_ID = uuid.UUID("f26180b2-5dda-495a-a014-ae02e63f172f")


def seed_if_needed(db: Session) -> None:
    existing_course = db.get(Course, AI_WEB_DEV_COURSE_ID)
    if existing_course:
        return

    ai_course = Course(
        id=AI_WEB_DEV_COURSE_ID,
        course_name="AI in Web Development",
        slug="ai-in-web-development",
        description="Build and ship AI-assisted web applications.",
        price_cents=499900,
    )
    db.add(ai_course)

    if db.execute(select(Course.id).where(Course.slug == "intro-to-python")).scalar_one_or_none() is None:
        db.add(
            Course(
                course_name="Intro To Python",
                slug="intro-to-python",
                description="Python fundamentals for new programmers.",
                price_cents=0,
            )
        )
    db.flush()

    # Starts inactive so the demo course is open until a batch is provisioned
    db.add(Cohort(course_id=ai_course.id, name="Batch 1", is_active=False))
    db.commit()
    logger.info("Seeded demo courses")
