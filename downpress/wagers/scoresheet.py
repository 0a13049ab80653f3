"""Score sheet, tee box and player models consumed by every wager format."""

from __future__ import annotations

import re
import uuid
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    field_serializer,
    field_validator,
)

HOLE_COUNT = 18
FRONT_NINE = range(0, 9)
BACK_NINE = range(9, 18)

# Booleans are kept as recorded and read as absent, never as 0 or 1.
ScoreToken = Union[StrictInt, StrictBool, str, None]

_DIGITS_RE = re.compile(r"[0-9]+")

EMPTY_ROW: Tuple[ScoreToken, ...] = (None,) * HOLE_COUNT


def parse_score(token: object) -> Optional[int]:
    """Return the stroke count recorded by ``token`` or ``None`` when absent.

    Only non-negative integers and plain ASCII digit strings count as scores.
    Anything else (blank cells, the ``"X"`` did-not-finish marker, negative
    numbers, booleans) is treated as not recorded.
    """

    if token is None or isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token if token >= 0 else None
    if isinstance(token, str) and _DIGITS_RE.fullmatch(token):
        return int(token)
    return None


def token_at(row: Sequence[ScoreToken], index: int) -> Optional[int]:
    if index < 0 or index >= len(row):
        return None
    return parse_score(row[index])


class Player(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    first_name: str = Field(alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    nickname: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def scorecard_name(self) -> str:
        if self.nickname:
            return f'"{self.nickname}"'
        return self.first_name[:8].upper()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id < other.id


class Hole(BaseModel):
    number: int = Field(ge=1, le=HOLE_COUNT)
    par: int = Field(ge=1)
    yardage: Optional[int] = Field(default=None, ge=0)
    handicap: Optional[int] = Field(default=None, ge=1, le=HOLE_COUNT)

    model_config = ConfigDict(frozen=True)


class TeeBox(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = ""
    rating: Optional[float] = None
    slope: Optional[int] = None
    holes: Tuple[Hole, ...]

    model_config = ConfigDict(frozen=True)

    @field_validator("holes")
    @classmethod
    def _eighteen_ordered_holes(cls, holes: Tuple[Hole, ...]) -> Tuple[Hole, ...]:
        if len(holes) != HOLE_COUNT:
            raise ValueError(f"tee box needs {HOLE_COUNT} holes, got {len(holes)}")
        numbers = [hole.number for hole in holes]
        if numbers != list(range(1, HOLE_COUNT + 1)):
            raise ValueError("holes must be numbered 1..18 in order")
        return holes

    @property
    def pars(self) -> Tuple[int, ...]:
        return tuple(hole.par for hole in self.holes)

    def par(self, index: int) -> int:
        return self.holes[index].par

    @classmethod
    def from_pars(cls, pars: Sequence[int], *, name: str = "") -> "TeeBox":
        return cls(
            name=name,
            holes=tuple(
                Hole(number=index + 1, par=par) for index, par in enumerate(pars)
            ),
        )


class ScoreSheet(BaseModel):
    """Immutable snapshot of every player's 18 score tokens."""

    rows: Mapping[str, Tuple[ScoreToken, ...]] = Field(
        default_factory=dict, validate_default=True
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("rows")
    @classmethod
    def _fixed_length_rows(
        cls, rows: Mapping[str, Tuple[ScoreToken, ...]]
    ) -> Mapping[str, Tuple[ScoreToken, ...]]:
        for player_id, row in rows.items():
            if len(row) != HOLE_COUNT:
                raise ValueError(
                    f"score row for {player_id!r} must have {HOLE_COUNT} entries"
                )
        return MappingProxyType(dict(rows))

    @field_serializer("rows")
    def _plain_rows(self, rows: Mapping[str, Tuple[ScoreToken, ...]]) -> dict:
        return dict(rows)

    @classmethod
    def from_mapping(
        cls, rows: Mapping[str, Iterable[ScoreToken]] | None = None
    ) -> "ScoreSheet":
        return cls(rows={pid: tuple(row) for pid, row in (rows or {}).items()})

    def has_player(self, player_id: str) -> bool:
        return player_id in self.rows

    def row(self, player_id: str) -> Tuple[ScoreToken, ...]:
        return self.rows.get(player_id, EMPTY_ROW)

    def score(self, player_id: str, index: int) -> Optional[int]:
        return token_at(self.row(player_id), index)

    def player_ids(self) -> Tuple[str, ...]:
        return tuple(self.rows)


__all__ = [
    "BACK_NINE",
    "EMPTY_ROW",
    "FRONT_NINE",
    "HOLE_COUNT",
    "Hole",
    "Player",
    "ScoreSheet",
    "ScoreToken",
    "TeeBox",
    "parse_score",
    "token_at",
]
