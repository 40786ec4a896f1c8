from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import ClientError, ServerError
from src.app.services.golf_course_client import IGolfCourseClient
from src.app.use_cases.golf_courses import GetCourseUseCase, SearchCoursesUseCase
from src.depends import get_golf_course_client
from src.libs.result import Error

router = APIRouter(prefix="/golf-courses", tags=["Golf Courses"])


def raise_for_error(error: Error):
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    if error.code == "UPSTREAM_ERROR":
        raise ClientError(error, status_code=error.details[0]["status_code"])
    if error.code == "API_KEY_NOT_CONFIGURED":
        raise ServerError(error, expose_message=True)
    raise ServerError(error)


# Declared before /{course_id} so "search" is not taken as an id
@router.get("/search")
async def search_golf_courses(
    query: Optional[str] = Query(None, description="Course name or location"),
    client: Optional[IGolfCourseClient] = Depends(get_golf_course_client),
):
    """
    Search Golf Courses

    Proxies the search to the course directory and returns its body unchanged.

    Raises:
        - 400 Bad Request: Missing query
        - 500 Internal Server Error: API key not configured, or directory unreachable
        - Upstream status: Directory rejected the request
    """
    result = await SearchCoursesUseCase(client).execute(query)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{course_id}")
async def get_golf_course(
    course_id: str,
    client: Optional[IGolfCourseClient] = Depends(get_golf_course_client),
):
    """
    Get Golf Course Details

    Raises:
        - 500 Internal Server Error: API key not configured, or directory unreachable
        - Upstream status: Directory rejected the request (e.g. 404 unknown course)
    """
    result = await GetCourseUseCase(client).execute(course_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
