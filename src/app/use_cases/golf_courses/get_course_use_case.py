"""
Get Golf Course Use Case

Fetches one course from the external directory.
"""

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


class GetCourseUseCase:
    """
    Use case for fetching golf course details.

    Business Rules:
    - No client means no API key was configured (API_KEY_NOT_CONFIGURED)
    - The course is unwrapped from the directory's {"course": {...}} envelope
      when present, otherwise the body is returned as-is
    """

    def __init__(self, client: Optional[IGolfCourseClient]):
        self.client = client

    async def execute(self, course_id: str) -> Result[Dict[str, Any]]:
        """
        Errors:
            - API_KEY_NOT_CONFIGURED: no directory API key
            - VALIDATION_ERROR: empty course id
            - UPSTREAM_ERROR: directory answered with an error status
            - DEPENDENCY_ERROR: directory unreachable
        """
        if self.client is None:
            return Return.err(API_KEY_NOT_CONFIGURED)

        if not course_id or not course_id.strip():
            return Return.err(Error("VALIDATION_ERROR", "Missing course ID"))

        try:
            data = await self.client.get_course(course_id)
        except GolfCourseApiError as exc:
            return Return.err(upstream_error("Failed to fetch course details", exc))
        except GolfCourseUnavailableError:
            logger.exception("Error fetching golf course details")
            return Return.err(Error("DEPENDENCY_ERROR", "Failed to fetch course details"))

        if isinstance(data, dict) and data.get("course"):
            return Return.ok(data["course"])
        return Return.ok(data)
