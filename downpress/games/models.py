from __future__ import annotations

import uuid
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from downpress.wagers.scoresheet import Player, ScoreSheet, ScoreToken, TeeBox


class ScoreEntry(BaseModel):
    player_id: str = Field(alias="playerId")
    hole: int
    score: ScoreToken = None

    model_config = ConfigDict(populate_by_name=True)


class Game(BaseModel):
    id: str
    created_ts: float = Field(alias="createdTs")
    course_id: Optional[str] = Field(default=None, alias="courseId")
    course_name: str = Field(alias="courseName")
    tee_box: TeeBox = Field(alias="teeBox")
    players: List[Player]
    scores: Dict[str, List[ScoreToken]] = Field(default_factory=dict)
    completed: bool = False

    model_config = ConfigDict(populate_by_name=True)

    def player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def score_sheet(self) -> ScoreSheet:
        """Copy of the current scores, safe to settle against."""

        return ScoreSheet.from_mapping(self.scores)


def new_game_id() -> str:
    """Generate a new game identifier."""

    return f"game_{uuid.uuid4().hex[:12]}"


__all__ = ["Game", "ScoreEntry", "new_game_id"]
