from .get_course_use_case import GetCourseUseCase
from .search_courses_use_case import SearchCoursesUseCase

__all__ = ["GetCourseUseCase", "SearchCoursesUseCase"]
