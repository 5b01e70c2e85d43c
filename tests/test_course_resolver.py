import uuid
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.core.errors import ApiError
from app.services.course_resolver import CourseResolver, decode_course_key, normalize_course_name

LEGACY_ID = "f26180b2-5dda-495a-a014-ae02e63f172f"


@pytest.fixture()
def resolver() -> CourseResolver:
    return CourseResolver({"ai-in-web-development": LEGACY_ID})


@pytest.mark.parametrize(
    "key",
    [
        "3f2b8c1e-0a4d-4e6f-9b7a-1c2d3e4f5a6b",
        "3F2B8C1E-0A4D-4E6F-9B7A-1C2D3E4F5A6B",
        str(uuid.uuid4()),
    ],
)
def test_uuid_key_is_returned_without_store_lookup(resolver: CourseResolver, key: str):
    db = Mock()
    assert resolver.resolve(db, f"  {key} ") == key
    db.execute.assert_not_called()


@pytest.mark.parametrize("key", [None, "", "   ", "\t\n"])
def test_empty_key_is_invalid_without_store_lookup(resolver: CourseResolver, key):
    db = Mock()
    with pytest.raises(ApiError) as exc_info:
        resolver.resolve(db, key)
    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "INVALID_COURSE_IDENTIFIER"
    db.execute.assert_not_called()


@pytest.mark.parametrize(
    "key",
    ["ai-in-web-development", "AI-In-Web-Development", "ai%2Din%2Dweb%2Ddevelopment", "AI%2DIN-WEB-DEVELOPMENT"],
)
def test_legacy_slug_maps_to_course_id(resolver: CourseResolver, key: str):
    db = Mock()
    assert resolver.resolve(db, key) == LEGACY_ID
    db.execute.assert_not_called()


def test_key_that_decodes_to_blank_is_invalid(resolver: CourseResolver, db):
    with pytest.raises(ApiError) as exc_info:
        resolver.resolve(db, "%20%20")
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize(
    "key",
    ["intro-to-python", "Intro To Python", "intro to python", "intro_to_python", "Intro%20To%20Python", "intro--to   python"],
)
def test_name_variants_resolve_to_same_course(resolver: CourseResolver, db, make_course, key: str):
    course = make_course("Intro To Python", slug="python-101")
    make_course("Advanced Python", slug="python-201")

    assert resolver.resolve(db, key) == str(course.id)


def test_name_with_dashes_matches_literal_name(resolver: CourseResolver, db, make_course):
    course = make_course("Data-Driven Design", slug="ddd")

    assert resolver.resolve(db, "data-driven design") == str(course.id)


def test_duplicate_names_resolve_to_oldest_course(resolver: CourseResolver, db, make_course):
    older = make_course("Web Basics", slug="web-basics-2024", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    make_course("Web Basics", slug="web-basics-2025", created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))

    assert resolver.resolve(db, "web-basics") == str(older.id)


def test_unknown_course_is_not_found(resolver: CourseResolver, db, make_course):
    make_course("Intro To Python")

    with pytest.raises(ApiError) as exc_info:
        resolver.resolve(db, "intro-to-rust")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Course not found"


def test_malformed_percent_encoding_falls_back_to_raw_key():
    assert decode_course_key("%E0%A4%A") == "%E0%A4%A"
    assert decode_course_key("caf%C3%A9 ") == "café"


def test_normalize_course_name():
    assert normalize_course_name("  intro__to--python  ") == "intro to python"
    assert normalize_course_name("a\t b") == "a b"


def test_legacy_alias_settings_reject_non_uuid_targets():
    with pytest.raises(ValidationError):
        Settings(legacy_course_slugs={"old-course": "not-a-uuid"})
    with pytest.raises(ValueError):
        CourseResolver({"old-course": "not-a-uuid"})


def test_legacy_alias_from_settings_resolves_to_canonical_id():
    settings = Settings(legacy_course_slugs={"Old-Course": LEGACY_ID.upper()})
    db = Mock()

    assert CourseResolver(settings.legacy_course_slugs).resolve(db, "old-course") == LEGACY_ID
