import uuid
from datetime import datetime, timezone

from app.models import Enrollment

LEGACY_ID = "f26180b2-5dda-495a-a014-ae02e63f172f"


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_list_courses_oldest_first(client, make_course):
    make_course("Intro To Rust", price_cents=1999, created_at=datetime(2025, 6, 1, tzinfo=timezone.utc))
    python = make_course(
        "Intro To Python",
        price_cents=4950,
        description="Basics",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )

    resp = client.get("/v1/courses")
    assert resp.status_code == 200, resp.text
    courses = resp.json()["courses"]
    assert [c["title"] for c in courses] == ["Intro To Python", "Intro To Rust"]

    first = courses[0]
    assert first["id"] == str(python.id)
    assert first["slug"] == "intro-to-python"
    assert first["description"] == "Basics"
    assert first["priceCents"] == 4950
    assert first["price"] == 50
    assert first["createdAt"].startswith("2025-01-01")
    assert courses[1]["price"] == 20


def test_get_course_by_any_key(client, make_course):
    course = make_course("Intro To Python")

    for key in (str(course.id), "intro-to-python", "Intro%20To%20Python", "INTRO_TO_PYTHON"):
        resp = client.get(f"/v1/courses/{key}")
        assert resp.status_code == 200, (key, resp.text)
        assert resp.json()["course"]["id"] == str(course.id)


def test_get_course_by_legacy_slug(client, make_course):
    make_course("AI in Web Development", slug="ai-web-dev", id=uuid.UUID(LEGACY_ID))

    resp = client.get("/v1/courses/AI-IN-WEB-DEVELOPMENT")
    assert resp.status_code == 200, resp.text
    assert resp.json()["course"]["id"] == LEGACY_ID


def test_get_course_errors(client):
    resp = client.get("/v1/courses/unknown-course")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Course not found", "code": "COURSE_NOT_FOUND"}

    resp = client.get("/v1/courses/00000000-0000-4000-8000-000000000000")
    assert resp.status_code == 404

    resp = client.get("/v1/courses/%20")
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_COURSE_IDENTIFIER"


def test_course_access_probe(client, make_user, make_course, make_cohort, add_member, auth_headers):
    open_course = make_course("Intro To Rust")
    gated = make_course("Intro To Python")
    cohort = make_cohort(gated)
    member = make_user("member@example.com")
    outsider = make_user("outsider@example.com")
    add_member(cohort, email="MEMBER@example.com")

    assert client.get(f"/v1/courses/{open_course.slug}/access").status_code == 204
    assert client.get("/v1/courses/intro-to-python/access").status_code == 401
    assert client.get("/v1/courses/intro-to-python/access", headers=auth_headers(outsider)).status_code == 403
    assert client.get("/v1/courses/intro-to-python/access", headers=auth_headers(member)).status_code == 204


def test_my_courses_lists_active_enrollments(client, db, make_user, make_course, auth_headers):
    user = make_user()
    python = make_course("Intro To Python")
    rust = make_course("Intro To Rust")
    db.add(Enrollment(user_id=user.id, course_id=rust.id, status="cancelled"))
    db.commit()

    resp = client.post("/v1/courses/intro-to-python/enroll", headers=auth_headers(user))
    assert resp.status_code == 200, resp.text

    resp = client.get("/v1/me/courses", headers=auth_headers(user))
    assert resp.status_code == 200, resp.text
    items = resp.json()["courses"]
    assert [item["course"]["id"] for item in items] == [str(python.id)]
    assert items[0]["status"] == "active"
    assert "joinedAt" in items[0]


def test_course_named_my_resolves_like_any_other(client, make_course):
    course = make_course("My", slug="my")

    resp = client.get("/v1/courses/my")
    assert resp.status_code == 200, resp.text
    assert resp.json()["course"]["id"] == str(course.id)


def test_me(client, make_user, auth_headers):
    user = make_user("me@example.com", full_name="Me Myself")

    resp = client.get("/v1/me", headers=auth_headers(user))
    assert resp.status_code == 200, resp.text
    body = resp.json()["user"]
    assert body["id"] == str(user.id)
    assert body["email"] == "me@example.com"
    assert body["fullName"] == "Me Myself"

    assert client.get("/v1/me", headers={"Authorization": "Bearer garbage"}).status_code == 401
