"""Shareable score payload exchanged between groups (QR code / copy-paste)."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from downpress.games.models import Game
from downpress.wagers.scoresheet import HOLE_COUNT, Player

logger = logging.getLogger(__name__)


class SharedPlayer(BaseModel):
    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    scores: List[str]

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("scores")
    @classmethod
    def _full_card(cls, scores: List[str]) -> List[str]:
        if len(scores) != HOLE_COUNT:
            raise ValueError(f"shared scores need {HOLE_COUNT} entries")
        return scores

    def to_player(self) -> Player:
        return Player(id=self.id, first_name=self.first_name, last_name=self.last_name)


class ShareableScoreData(BaseModel):
    group_id: str = Field(alias="groupId")
    course_id: Optional[str] = Field(default=None, alias="courseId")
    course_name: str = Field(alias="courseName")
    tee_box_id: str = Field(alias="teeBoxId")
    tee_box_name: str = Field(alias="teeBoxName")
    timestamp: datetime
    players: List[SharedPlayer]

    model_config = ConfigDict(populate_by_name=True)

    def to_qr_string(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_qr_string(cls, payload: str) -> Optional["ShareableScoreData"]:
        try:
            return cls.model_validate_json(payload)
        except ValidationError as exc:
            logger.debug("rejected share payload: %s", exc.error_count())
            return None

    def score_rows(self) -> Dict[str, List[str]]:
        """Rows for players that have at least one cell filled in."""

        return {
            player.id: list(player.scores)
            for player in self.players
            if any(cell.strip() for cell in player.scores)
        }


def _cell(token: object) -> str:
    return "" if token is None else str(token)


def build_share_payload(
    game: Game, *, group_id: Optional[str] = None
) -> ShareableScoreData:
    """Package a game's roster and scores for another group to import."""

    players = []
    for player in game.players:
        row = game.scores.get(player.id) or [None] * HOLE_COUNT
        players.append(
            SharedPlayer(
                id=player.id,
                first_name=player.first_name,
                last_name=player.last_name,
                scores=[_cell(token) for token in row],
            )
        )
    return ShareableScoreData(
        group_id=group_id or uuid.uuid4().hex,
        course_id=game.course_id,
        course_name=game.course_name,
        tee_box_id=game.tee_box.id,
        tee_box_name=game.tee_box.name,
        timestamp=datetime.now(timezone.utc),
        players=players,
    )


__all__ = ["ShareableScoreData", "SharedPlayer", "build_share_payload"]
