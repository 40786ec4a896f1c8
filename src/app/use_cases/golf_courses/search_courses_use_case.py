import logging
from typing import Any, Dict, Optional

from src.app.services.golf_course_client import (
    GolfCourseApiError,
    GolfCourseUnavailableError,
    IGolfCourseClient,
)
from src.libs.result import Error, Result, Return
from .errors import API_KEY_NOT_CONFIGURED, upstream_error

logger = logging.getLogger(__name__)


class SearchCoursesUseCase:
    """Search the external course directory; the result body is passed through unchanged"""

    def __init__(self, client: Optional[IGolfCourseClient]):
        self.client = client

    async def execute(self, query: Optional[str]) -> Result[Dict[str, Any]]:
        if self.client is None:
            return Return.err(API_KEY_NOT_CONFIGURED)

        if not query:
            return Return.err(Error("VALIDATION_ERROR", "Missing required query parameter: query"))

        try:
            data = await self.client.search_courses(query)
        except GolfCourseApiError as exc:
            return Return.err(upstream_error("Failed to search golf courses", exc))
        except GolfCourseUnavailableError:
            logger.exception("Error searching golf courses")
            return Return.err(Error("DEPENDENCY_ERROR", "Failed to search golf courses"))

        return Return.ok(data)
