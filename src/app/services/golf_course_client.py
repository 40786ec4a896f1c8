from abc import ABC, abstractmethod
from typing import Any, Dict


class GolfCourseApiError(Exception):
    """The course directory answered with a non-success status"""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Golf course API returned {status_code}")


class GolfCourseUnavailableError(Exception):
    """The course directory could not be reached or sent an unreadable body"""


class IGolfCourseClient(ABC):
    """Read-only client for the external golf course directory"""

    @abstractmethod
    async def get_course(self, course_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def search_courses(self, query: str) -> Dict[str, Any]:
        pass
