"""Bet instances, one immutable model per wager format."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .scoresheet import Player, ScoreSheet, TeeBox


class BetFormat(str, Enum):
    INDIVIDUAL = "individual"
    FOUR_BALL = "four_ball"
    ALABAMA = "alabama"
    DODA = "doda"
    SKINS = "skins"


HEAD_TO_HEAD_FORMATS = frozenset({BetFormat.INDIVIDUAL, BetFormat.FOUR_BALL})


def new_bet_id() -> str:
    return f"bet_{uuid.uuid4().hex[:12]}"


def _ensure_distinct(players: List[Player]) -> None:
    ids = [player.id for player in players]
    if len(set(ids)) != len(ids):
        raise ValueError("a player can only take one seat in a bet")


class _BetBase(BaseModel):
    id: str = Field(default_factory=new_bet_id)
    scores: Optional[ScoreSheet] = None
    tee_box: Optional[TeeBox] = Field(default=None, alias="teeBox")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def bet_format(self) -> BetFormat:
        return BetFormat(self.format)  # type: ignore[attr-defined]

    @property
    def is_frozen(self) -> bool:
        return self.scores is not None or self.tee_box is not None

    def participants(self) -> List[Player]:
        raise NotImplementedError

    def participant_ids(self) -> List[str]:
        return [player.id for player in self.participants()]

    def with_snapshot(self, scores: ScoreSheet, tee_box: TeeBox):
        """Copy of this bet settled against its own frozen inputs."""

        return self.model_copy(update={"scores": scores, "tee_box": tee_box})


class IndividualMatchBet(_BetBase):
    format: Literal["individual"] = "individual"
    player1: Player
    player2: Player
    per_hole_amount: float = Field(ge=0, alias="perHoleAmount")
    per_birdie_amount: float = Field(default=0.0, ge=0, alias="perBirdieAmount")
    press_on_9_and_18: bool = Field(default=False, alias="pressOn9And18")

    @model_validator(mode="after")
    def _two_players(self) -> "IndividualMatchBet":
        _ensure_distinct([self.player1, self.player2])
        return self

    def participants(self) -> List[Player]:
        return [self.player1, self.player2]


class FourBallMatchBet(_BetBase):
    format: Literal["four_ball"] = "four_ball"
    team1: Tuple[Player, Player]
    team2: Tuple[Player, Player]
    per_hole_amount: float = Field(ge=0, alias="perHoleAmount")
    per_birdie_amount: float = Field(default=0.0, ge=0, alias="perBirdieAmount")
    # Carried for display; settlement ignores it.
    press_on_9_and_18: bool = Field(default=False, alias="pressOn9And18")

    @model_validator(mode="after")
    def _four_players(self) -> "FourBallMatchBet":
        _ensure_distinct([*self.team1, *self.team2])
        return self

    def participants(self) -> List[Player]:
        return [*self.team1, *self.team2]

    def team_of(self, player_id: str) -> Optional[int]:
        if any(player.id == player_id for player in self.team1):
            return 1
        if any(player.id == player_id for player in self.team2):
            return 2
        return None


class AlabamaBet(_BetBase):
    format: Literal["alabama"] = "alabama"
    teams: List[List[Player]] = Field(min_length=1)
    swing_man: Optional[Player] = Field(default=None, alias="swingMan")
    counting_scores: int = Field(ge=1, alias="countingScores")
    front_nine_amount: float = Field(default=0.0, ge=0, alias="frontNineAmount")
    back_nine_amount: float = Field(default=0.0, ge=0, alias="backNineAmount")
    low_ball_amount: float = Field(default=0.0, ge=0, alias="lowBallAmount")
    per_birdie_amount: float = Field(default=0.0, ge=0, alias="perBirdieAmount")

    @model_validator(mode="after")
    def _valid_teams(self) -> "AlabamaBet":
        if any(not team for team in self.teams):
            raise ValueError("every alabama team needs at least one player")
        players = [player for team in self.teams for player in team]
        if self.swing_man is not None:
            players.append(self.swing_man)
        _ensure_distinct(players)
        return self

    def participants(self) -> List[Player]:
        players = [player for team in self.teams for player in team]
        if self.swing_man is not None:
            players.append(self.swing_man)
        return players

    def team_ids(self) -> List[List[str]]:
        return [[player.id for player in team] for team in self.teams]


class DoDaBet(_BetBase):
    format: Literal["doda"] = "doda"
    is_pool: bool = Field(default=True, alias="isPool")
    amount: float = Field(ge=0)
    players: List[Player] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_players(self) -> "DoDaBet":
        _ensure_distinct(self.players)
        return self

    def participants(self) -> List[Player]:
        return list(self.players)


class SkinsBet(_BetBase):
    format: Literal["skins"] = "skins"
    amount: float = Field(ge=0)
    players: List[Player] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_players(self) -> "SkinsBet":
        _ensure_distinct(self.players)
        return self

    def participants(self) -> List[Player]:
        return list(self.players)


Bet = Annotated[
    Union[IndividualMatchBet, FourBallMatchBet, AlabamaBet, DoDaBet, SkinsBet],
    Field(discriminator="format"),
]


__all__ = [
    "AlabamaBet",
    "Bet",
    "BetFormat",
    "DoDaBet",
    "FourBallMatchBet",
    "HEAD_TO_HEAD_FORMATS",
    "IndividualMatchBet",
    "SkinsBet",
    "new_bet_id",
]
