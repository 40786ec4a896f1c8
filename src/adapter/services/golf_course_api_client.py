import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from src.app.services.golf_course_client import (
    GolfCourseApiError,
    GolfCourseUnavailableError,
    IGolfCourseClient,
)

logger = logging.getLogger(__name__)


class GolfCourseApiClient(IGolfCourseClient):
    """
    httpx client for golfcourseapi.com.

    A client is opened per call. ``transport`` lets callers substitute an
    ``httpx.MockTransport`` or any other transport.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.transport = transport
        self.timeout = timeout

    async def get_course(self, course_id: str) -> Dict[str, Any]:
        return await self._get(f"/courses/{quote(course_id, safe='')}")

    async def search_courses(self, query: str) -> Dict[str, Any]:
        return await self._get("/search", params={"search_query": query})

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Key {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                transport=self.transport,
                timeout=self.timeout,
            ) as client:
                response = await client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise GolfCourseUnavailableError(str(exc)) from exc

        if not response.is_success:
            logger.error(
                f"Golf course API error: {response.status_code}",
                extra={"context": {"path": path, "body": response.text}},
            )
            raise GolfCourseApiError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as exc:
            raise GolfCourseUnavailableError("Golf course API returned invalid JSON") from exc
