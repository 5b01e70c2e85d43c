"""Map a caller-supplied course key to a canonical course id.

A course key may be the course UUID, a (possibly percent-encoded) slug, a
legacy slug kept for old links, or the course name written with spaces,
dashes or underscores.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Mapping
from urllib.parse import unquote

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.error_codes import ErrorCode
from app.core.errors import ApiError
from app.models import Course

logger = logging.getLogger(__name__)

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
_SEPARATORS_RE = re.compile(r"[-_]")
_WHITESPACE_RE = re.compile(r"\s+")


def _invalid_identifier() -> ApiError:
    return ApiError(status_code=400, code=ErrorCode.INVALID_COURSE_IDENTIFIER, message="Course identifier is required")


def decode_course_key(key: str) -> str:
    try:
        return unquote(key, errors="strict").strip()
    except UnicodeDecodeError:
        return key.strip()


def normalize_course_name(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", _SEPARATORS_RE.sub(" ", value)).strip()


class CourseResolver:
    def __init__(self, legacy_slugs: Mapping[str, uuid.UUID | str] | None = None):
        # Raises ValueError for an alias that does not point at a UUID.
        self.legacy_slugs = {
            slug.lower(): str(uuid.UUID(str(course_id))) for slug, course_id in (legacy_slugs or {}).items()
        }

    def resolve(self, db: Session, raw_key: str | None) -> str:
        """Return the course id for ``raw_key`` or raise ``ApiError`` (400/404).

        UUID-shaped keys are returned as-is; the caller's fetch decides whether
        the course actually exists.
        """
        course_key = (raw_key or "").strip()
        if not course_key:
            raise _invalid_identifier()

        if UUID_RE.match(course_key):
            return course_key

        decoded_key = decode_course_key(course_key)

        alias_match = self.legacy_slugs.get(decoded_key.lower())
        if alias_match:
            logger.debug("Course key %r resolved through legacy alias", course_key)
            return alias_match

        candidates = list(dict.fromkeys(v for v in (decoded_key, normalize_course_name(decoded_key)) if v))
        if not candidates:
            raise _invalid_identifier()

        course_id = db.execute(
            select(Course.id)
            .where(func.lower(Course.course_name).in_([name.lower() for name in candidates]))
            .order_by(Course.created_at.asc(), Course.id.asc())
            .limit(1)
        ).scalar_one_or_none()
        if course_id is None:
            logger.debug("No course matches key %r (candidates=%s)", course_key, candidates)
            raise ApiError(status_code=404, code=ErrorCode.COURSE_NOT_FOUND, message="Course not found")

        return str(course_id)


def get_course_resolver(settings=Depends(get_settings)) -> CourseResolver:
    return CourseResolver(settings.legacy_course_slugs)
