from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from downpress.wagers.scoresheet import TeeBox


class Course(BaseModel):
    id: str
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    tee_boxes: List[TeeBox] = Field(default_factory=list, alias="teeBoxes")

    model_config = ConfigDict(populate_by_name=True)

    def tee_box(self, name: str) -> Optional[TeeBox]:
        wanted = name.strip().lower()
        for tee in self.tee_boxes:
            if tee.name.lower() == wanted or tee.id == name:
                return tee
        return None


class CourseSummary(BaseModel):
    id: str
    name: str
    tee_names: List[str] = Field(alias="teeNames")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_course(cls, course: Course) -> "CourseSummary":
        return cls(
            id=course.id,
            name=course.name,
            tee_names=[tee.name for tee in course.tee_boxes],
        )


__all__ = ["Course", "CourseSummary"]
