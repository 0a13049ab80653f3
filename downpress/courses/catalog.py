from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from downpress.wagers.scoresheet import Hole, TeeBox

from .models import Course

_BAYOU_PARS = (4, 4, 5, 3, 4, 5, 4, 4, 3, 4, 4, 4, 4, 5, 3, 5, 3, 4)
_BAYOU_HANDICAPS = (7, 3, 11, 1, 9, 17, 13, 5, 15, 6, 8, 14, 4, 10, 16, 18, 12, 2)

# name, rating, slope, yardages 1..18
_BAYOU_TEES: Tuple[Tuple[str, float, int, Tuple[int, ...]], ...] = (
    (
        "Championship",
        74.5,
        131,
        (376, 388, 554, 200, 416, 544, 406, 458, 174,
         415, 414, 390, 434, 597, 129, 553, 208, 436),
    ),
    (
        "Black",
        73.8,
        125,
        (376, 388, 517, 200, 377, 544, 406, 416, 174,
         415, 414, 390, 406, 563, 123, 553, 208, 436),
    ),
    (
        "Black/Blue",
        72.4,
        123,
        (376, 388, 497, 174, 360, 544, 406, 378, 174,
         394, 414, 350, 392, 524, 123, 553, 175, 408),
    ),
    (
        "Blue",
        71.5,
        122,
        (359, 366, 497, 174, 360, 499, 369, 378, 155,
         394, 396, 350, 392, 524, 109, 522, 175, 408),
    ),
    (
        "Blue/Gold",
        69.7,
        118,
        (343, 354, 482, 174, 316, 499, 346, 342, 155,
         394, 327, 339, 327, 475, 109, 480, 175, 349),
    ),
    (
        "Gold",
        68.8,
        117,
        (343, 354, 482, 136, 316, 467, 346, 342, 145,
         358, 327, 339, 327, 475, 101, 480, 141, 349),
    ),
    (
        "White",
        66.5,
        110,
        (318, 321, 430, 129, 283, 436, 315, 336, 100,
         353, 301, 309, 286, 470, 73, 445, 116, 316),
    ),
    (
        "Green",
        62.8,
        100,
        (262, 255, 364, 129, 229, 376, 250, 259, 100,
         282, 259, 223, 220, 394, 73, 360, 116, 268),
    ),
)  # fmt: skip


def _build_tee(
    course_id: str,
    name: str,
    rating: float,
    slope: int,
    pars: Sequence[int],
    handicaps: Sequence[int],
    yardages: Sequence[int],
) -> TeeBox:
    tee_id = f"{course_id}:{name.lower().replace('/', '-')}"
    return TeeBox(
        id=tee_id,
        name=name,
        rating=rating,
        slope=slope,
        holes=tuple(
            Hole(number=index + 1, par=par, yardage=yardage, handicap=handicap)
            for index, (par, handicap, yardage) in enumerate(
                zip(pars, handicaps, yardages)
            )
        ),
    )


def _seed_courses() -> Dict[str, Course]:
    bayou = Course(
        id="bayou-desiard",
        name="Bayou DeSiard Country Club",
        latitude=32.5429,
        longitude=-92.0974,
        tee_boxes=[
            _build_tee(
                "bayou-desiard",
                name,
                rating,
                slope,
                _BAYOU_PARS,
                _BAYOU_HANDICAPS,
                yardages,
            )
            for name, rating, slope, yardages in _BAYOU_TEES
        ],
    )
    return {bayou.id: bayou}


@lru_cache(maxsize=1)
def _catalog() -> Dict[str, Course]:
    return _seed_courses()


def list_courses() -> List[Course]:
    return list(_catalog().values())


def get_course(course_id: str) -> Optional[Course]:
    return _catalog().get(course_id)


def get_tee_box(course_id: str, tee_name: str) -> Optional[TeeBox]:
    course = get_course(course_id)
    if course is None:
        return None
    return course.tee_box(tee_name)


__all__ = ["get_course", "get_tee_box", "list_courses"]
