"""
Use Cases

Organized by domain folder:
- auth/: Password reset flow
- health/: Dependency health checks
- golf_courses/: Course directory lookups
"""

from .auth import (
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    PasswordResetSettings,
)
from .golf_courses import GetCourseUseCase, SearchCoursesUseCase
from .health import CheckDatabaseUseCase

__all__ = [
    # Auth
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "PasswordResetSettings",
    # Health
    "CheckDatabaseUseCase",
    # Golf courses
    "GetCourseUseCase",
    "SearchCoursesUseCase",
]
