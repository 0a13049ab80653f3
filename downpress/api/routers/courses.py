from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from downpress.courses import (
    Course,
    CourseSummary,
    get_course,
    get_tee_box,
    list_courses,
)
from downpress.security import require_api_key
from downpress.wagers.scoresheet import TeeBox

router = APIRouter(
    prefix="/api/courses",
    tags=["courses"],
    dependencies=[Depends(require_api_key)],
)


@router.get("", response_model=List[CourseSummary])
def list_course_summaries():
    return [CourseSummary.from_course(course) for course in list_courses()]


@router.get("/{course_id}", response_model=Course)
def read_course(course_id: str):
    course = get_course(course_id)
    if not course:
        raise HTTPException(status_code=404, detail="course_not_found")
    return course


@router.get("/{course_id}/tees/{tee_name}", response_model=TeeBox)
def read_tee_box(course_id: str, tee_name: str):
    tee_box = get_tee_box(course_id, tee_name)
    if not tee_box:
        raise HTTPException(status_code=404, detail="tee_not_found")
    return tee_box


__all__ = ["router"]
