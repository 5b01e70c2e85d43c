class ErrorCode:
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_USER = "INVALID_USER"

    INVALID_COURSE_IDENTIFIER = "INVALID_COURSE_IDENTIFIER"
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    COURSE_CONFLICT = "COURSE_CONFLICT"

    COHORT_ACCESS_DENIED = "COHORT_ACCESS_DENIED"
    COHORT_NOT_FOUND = "COHORT_NOT_FOUND"

    APPLICATION_NOT_FOUND = "APPLICATION_NOT_FOUND"
