from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_admin_key
from app.api.routes.tutor_applications import application_out
from app.db.session import get_db
from app.models import Cohort, CohortMember, Course
from app.schemas.admin import (
    AdminCourseCreateRequest,
    AdminCourseResponse,
    CohortCreateRequest,
    CohortMemberOut,
    CohortMembersAddRequest,
    CohortMembersResponse,
    CohortResponse,
    CohortUpdateRequest,
)
from app.schemas.tutor_applications import (
    ApprovedCourseOut,
    ApprovedTutorOut,
    TutorApplicationListResponse,
    TutorApprovalResponse,
)
from app.services.admin_course_service import (
    add_cohort_members,
    approve_tutor_application,
    create_cohort,
    create_course,
    get_cohort_or_404,
    get_course_or_404,
    list_cohort_members,
    update_cohort,
)
from app.services.course_resolver import CourseResolver, get_course_resolver
from app.services.tutor_application_service import list_tutor_applications

router = APIRouter(prefix="/v1/admin", tags=["admin"], dependencies=[Depends(require_admin_key)])


def _course_response(course: Course) -> AdminCourseResponse:
    return AdminCourseResponse(
        id=str(course.id),
        course_name=course.course_name,
        slug=course.slug,
        description=course.description,
        price_cents=course.price_cents,
        created_at=course.created_at.isoformat(),
    )


def _cohort_response(cohort: Cohort) -> CohortResponse:
    return CohortResponse(
        id=str(cohort.id),
        course_id=str(cohort.course_id),
        name=cohort.name,
        is_active=cohort.is_active,
        created_at=cohort.created_at.isoformat(),
    )


def _member_out(member: CohortMember) -> CohortMemberOut:
    return CohortMemberOut(
        id=str(member.id),
        email=member.email,
        user_id=str(member.user_id) if member.user_id else None,
        status=member.status,
    )


@router.post("/courses", response_model=AdminCourseResponse, status_code=201)
def create_course_endpoint(payload: AdminCourseCreateRequest, db: Session = Depends(get_db)) -> AdminCourseResponse:
    return _course_response(create_course(db, payload))


@router.post("/courses/{course_key}/cohorts", response_model=CohortResponse, status_code=201)
def create_cohort_endpoint(
    course_key: str,
    payload: CohortCreateRequest,
    db: Session = Depends(get_db),
    resolver: CourseResolver = Depends(get_course_resolver),
) -> CohortResponse:
    course = get_course_or_404(db, resolver.resolve(db, course_key))
    return _cohort_response(create_cohort(db, course, payload))


@router.patch("/cohorts/{cohort_id}", response_model=CohortResponse)
def update_cohort_endpoint(
    cohort_id: str,
    payload: CohortUpdateRequest,
    db: Session = Depends(get_db),
) -> CohortResponse:
    return _cohort_response(update_cohort(db, cohort_id, payload))


@router.get("/cohorts/{cohort_id}/members", response_model=CohortMembersResponse)
def list_members_endpoint(cohort_id: str, db: Session = Depends(get_db)) -> CohortMembersResponse:
    cohort = get_cohort_or_404(db, cohort_id)
    members = list_cohort_members(db, cohort.id)
    return CohortMembersResponse(cohort_id=str(cohort.id), members=[_member_out(m) for m in members])


@router.post("/cohorts/{cohort_id}/members", response_model=CohortMembersResponse, status_code=201)
def add_members_endpoint(
    cohort_id: str,
    payload: CohortMembersAddRequest,
    db: Session = Depends(get_db),
) -> CohortMembersResponse:
    cohort = get_cohort_or_404(db, cohort_id)
    added = add_cohort_members(db, cohort, [str(email) for email in payload.emails])
    members = list_cohort_members(db, cohort.id)
    return CohortMembersResponse(cohort_id=str(cohort.id), members=[_member_out(m) for m in members], added=added)


@router.get("/tutor-applications", response_model=TutorApplicationListResponse)
def list_tutor_applications_endpoint(db: Session = Depends(get_db)) -> TutorApplicationListResponse:
    return TutorApplicationListResponse(applications=[application_out(a) for a in list_tutor_applications(db)])


@router.post(
    "/tutor-applications/{application_id}/approve",
    response_model=TutorApprovalResponse,
    response_model_exclude_none=True,
)
def approve_tutor_application_endpoint(application_id: str, db: Session = Depends(get_db)) -> TutorApprovalResponse:
    approval = approve_tutor_application(db, application_id)
    if approval.already_approved:
        return TutorApprovalResponse(message="Application already approved")
    return TutorApprovalResponse(
        message="Application approved and course created",
        tutor=ApprovedTutorOut(
            user_id=str(approval.user.id),
            full_name=approval.user.full_name,
            email=approval.user.email,
        ),
        course=ApprovedCourseOut(
            course_id=str(approval.course.id),
            slug=approval.course.slug,
            title=approval.course.course_name,
        ),
    )
