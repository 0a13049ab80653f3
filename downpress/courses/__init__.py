"""Built-in course and tee box catalog."""

from .catalog import get_course, get_tee_box, list_courses
from .models import Course, CourseSummary

__all__ = [
    "Course",
    "CourseSummary",
    "get_course",
    "get_tee_box",
    "list_courses",
]
