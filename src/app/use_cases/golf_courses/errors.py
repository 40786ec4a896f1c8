from src.app.services.golf_course_client import GolfCourseApiError
from src.libs.result import Error

API_KEY_NOT_CONFIGURED = Error(
    "API_KEY_NOT_CONFIGURED",
    "Golf Course API key not configured. Please add GOLF_COURSE_API_KEY to env.yaml.",
)


def upstream_error(message: str, exc: GolfCourseApiError) -> Error:
    """Carries the upstream status so the caller can pass it through"""
    return Error(
        "UPSTREAM_ERROR",
        message,
        details=[{"status_code": exc.status_code, "body": exc.body}],
    )
