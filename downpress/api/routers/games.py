from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Annotated, Dict, List, Literal, Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from downpress.config import get_settings
from downpress.courses import get_course
from downpress.games.models import Game, ScoreEntry
from downpress.games.store import (
    complete_game,
    create_game,
    delete_game,
    freeze_inputs,
    get_bets,
    get_game,
    settlement_inputs,
    upsert_scores,
)
from downpress.metrics import BETS_SETTLED, SETTLEMENT_PASSES
from downpress.security import require_api_key
from downpress.wagers.bets import HEAD_TO_HEAD_FORMATS, Bet
from downpress.wagers.registry import BetNotFound, BetRegistry
from downpress.wagers.scoresheet import Player, TeeBox
from downpress.wagers.settle import FourBallShare, build_ledger, settle_breakdown

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/games",
    tags=["games"],
    dependencies=[Depends(require_api_key)],
)


class GameCreateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_name: str | None = Field(default=None, alias="courseName")
    course_id: str | None = Field(default=None, alias="courseId")
    tee_name: str | None = Field(default=None, alias="teeName")
    pars: List[int] | None = None
    players: List[Player]


def _resolve_tee_box(payload: GameCreateIn) -> tuple[str | None, str, TeeBox]:
    if payload.pars is not None:
        try:
            tee_box = TeeBox.from_pars(payload.pars, name=payload.tee_name or "")
        except ValidationError:
            raise HTTPException(status_code=400, detail="invalid_tee_box")
        return payload.course_id, payload.course_name or "", tee_box

    settings = get_settings()
    course_id = payload.course_id or settings.default_course_id
    course = get_course(course_id)
    if not course:
        raise HTTPException(status_code=404, detail="course_not_found")
    tee_box = course.tee_box(payload.tee_name or settings.default_tee_name)
    if not tee_box:
        raise HTTPException(status_code=404, detail="tee_not_found")
    return course.id, payload.course_name or course.name, tee_box


@router.post("", response_model=Game)
def create(payload: GameCreateIn):
    if not payload.players:
        raise HTTPException(status_code=400, detail="no_players")

    course_id, course_name, tee_box = _resolve_tee_box(payload)
    try:
        game = create_game(
            course_name=course_name,
            tee_box=tee_box,
            players=list(payload.players),
            course_id=course_id,
        )
    except ValueError:
        raise HTTPException(status_code=400, detail="duplicate_players")
    return game


def _require_game(game_id: str) -> Game:
    game = get_game(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="game_not_found")
    return game


def _require_bets(game_id: str) -> BetRegistry:
    registry = get_bets(game_id)
    if registry is None:
        raise HTTPException(status_code=404, detail="game_not_found")
    return registry


@router.get("/{game_id}", response_model=Game)
def read(game_id: str):
    return _require_game(game_id)


class ScoresIn(BaseModel):
    scores: List[ScoreEntry]


@router.post("/{game_id}/scores", response_model=Game)
def post_scores(game_id: str, payload: ScoresIn):
    try:
        game = upsert_scores(game_id, payload.scores)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid_score_entries")
    if not game:
        raise HTTPException(status_code=404, detail="game_not_found")
    return game


@router.post("/{game_id}/complete", response_model=Game)
def complete(game_id: str):
    game = complete_game(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="game_not_found")
    return game


@router.delete("/{game_id}", status_code=204)
def delete(game_id: str) -> None:
    if not delete_game(game_id):
        raise HTTPException(status_code=404, detail="game_not_found")
    logger.info("deleted game %s", game_id)


class _BetIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class IndividualBetIn(_BetIn):
    format: Literal["individual"]
    player1: str
    player2: str
    per_hole_amount: float = Field(alias="perHoleAmount")
    per_birdie_amount: float = Field(default=0.0, alias="perBirdieAmount")
    press_on_9_and_18: bool = Field(default=False, alias="pressOn9And18")


class FourBallBetIn(_BetIn):
    format: Literal["four_ball"]
    team1: List[str]
    team2: List[str]
    per_hole_amount: float = Field(alias="perHoleAmount")
    per_birdie_amount: float = Field(default=0.0, alias="perBirdieAmount")
    press_on_9_and_18: bool = Field(default=False, alias="pressOn9And18")


class AlabamaBetIn(_BetIn):
    format: Literal["alabama"]
    teams: List[List[str]]
    swing_man: str | None = Field(default=None, alias="swingMan")
    counting_scores: int = Field(alias="countingScores")
    front_nine_amount: float = Field(default=0.0, alias="frontNineAmount")
    back_nine_amount: float = Field(default=0.0, alias="backNineAmount")
    low_ball_amount: float = Field(default=0.0, alias="lowBallAmount")
    per_birdie_amount: float = Field(default=0.0, alias="perBirdieAmount")


class DoDaBetIn(_BetIn):
    format: Literal["doda"]
    players: List[str]
    amount: float
    is_pool: bool = Field(default=True, alias="isPool")


class SkinsBetIn(_BetIn):
    format: Literal["skins"]
    players: List[str]
    amount: float


BetIn = Union[IndividualBetIn, FourBallBetIn, AlabamaBetIn, DoDaBetIn, SkinsBetIn]


def _players(game: Game, player_ids: List[str]) -> List[Player]:
    players = []
    for player_id in player_ids:
        player = game.player(player_id)
        if player is None:
            raise HTTPException(status_code=400, detail="unknown_player")
        players.append(player)
    return players


def _register(registry: BetRegistry, game: Game, payload: BetIn) -> Bet:
    if isinstance(payload, IndividualBetIn):
        player1, player2 = _players(game, [payload.player1, payload.player2])
        return registry.add_individual(
            player1=player1,
            player2=player2,
            per_hole_amount=payload.per_hole_amount,
            per_birdie_amount=payload.per_birdie_amount,
            press_on_9_and_18=payload.press_on_9_and_18,
        )
    if isinstance(payload, FourBallBetIn):
        return registry.add_four_ball(
            team1=tuple(_players(game, payload.team1)),  # type: ignore[arg-type]
            team2=tuple(_players(game, payload.team2)),  # type: ignore[arg-type]
            per_hole_amount=payload.per_hole_amount,
            per_birdie_amount=payload.per_birdie_amount,
            press_on_9_and_18=payload.press_on_9_and_18,
        )
    if isinstance(payload, AlabamaBetIn):
        swing_man = None
        if payload.swing_man is not None:
            (swing_man,) = _players(game, [payload.swing_man])
        return registry.add_alabama(
            teams=[_players(game, team) for team in payload.teams],
            swing_man=swing_man,
            counting_scores=payload.counting_scores,
            front_nine_amount=payload.front_nine_amount,
            back_nine_amount=payload.back_nine_amount,
            low_ball_amount=payload.low_ball_amount,
            per_birdie_amount=payload.per_birdie_amount,
        )
    if isinstance(payload, DoDaBetIn):
        return registry.add_doda(
            players=_players(game, payload.players),
            amount=payload.amount,
            is_pool=payload.is_pool,
        )
    return registry.add_skins(
        players=_players(game, payload.players), amount=payload.amount
    )


class BetsOut(BaseModel):
    bets: List[Bet]


@router.post("/{game_id}/bets", response_model=Bet)
def create_bet(
    game_id: str, payload: Annotated[BetIn, Body(discriminator="format")]
):
    game = _require_game(game_id)
    registry = _require_bets(game_id)
    try:
        return _register(registry, game, payload)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid_bet")


@router.get("/{game_id}/bets", response_model=BetsOut)
def list_bets(game_id: str, fmt: Optional[str] = Query(default=None, alias="format")):
    registry = _require_bets(game_id)
    try:
        bets = registry.list_bets(fmt)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid_format")
    return BetsOut(bets=bets)


@router.delete("/{game_id}/bets/{bet_id}", response_model=Bet)
def delete_bet(game_id: str, bet_id: str):
    registry = _require_bets(game_id)
    try:
        return registry.remove(bet_id)
    except BetNotFound:
        raise HTTPException(status_code=404, detail="bet_not_found")


@router.post("/{game_id}/bets/{bet_id}/freeze", response_model=Bet)
def freeze_bet(game_id: str, bet_id: str):
    registry = _require_bets(game_id)
    inputs = freeze_inputs(game_id)
    if inputs is None:
        raise HTTPException(status_code=404, detail="game_not_found")
    sheet, tee_box = inputs
    try:
        return registry.freeze(bet_id, sheet, tee_box)
    except BetNotFound:
        raise HTTPException(status_code=404, detail="bet_not_found")


class TeamTotalsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    front_total: int = Field(alias="frontTotal")
    back_total: int = Field(alias="backTotal")
    front_low_ball: int = Field(alias="frontLowBall")
    back_low_ball: int = Field(alias="backLowBall")
    birdies: int


class BreakdownOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bet_id: str = Field(alias="betId")
    format: str
    outcome: Union[float, Dict[str, float]]
    skins_by_hole: Dict[int, str] = Field(default_factory=dict, alias="skinsByHole")
    value_per_skin: float | None = Field(default=None, alias="valuePerSkin")
    doda_counts: Dict[str, int] = Field(default_factory=dict, alias="dodaCounts")
    team_totals: List[TeamTotalsOut] = Field(
        default_factory=list, alias="teamTotals"
    )


class SettlementOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_id: str = Field(alias="gameId")
    scope: Literal["sheet", "round"]
    four_ball_share: FourBallShare = Field(alias="fourBallShare")
    ledger: Dict[str, float]
    bets: List[BreakdownOut]


@router.get("/{game_id}/settlement", response_model=SettlementOut)
def settlement(
    game_id: str,
    scope: Literal["sheet", "round"] = Query(default="sheet"),
    four_ball_share: FourBallShare | None = Query(default=None, alias="fourBallShare"),
):
    inputs = settlement_inputs(game_id)
    if inputs is None:
        raise HTTPException(status_code=404, detail="game_not_found")

    share = FourBallShare(four_ball_share or get_settings().four_ball_share)
    formats = HEAD_TO_HEAD_FORMATS if scope == "round" else None
    bets = [
        bet for bet in inputs.bets if formats is None or bet.bet_format in formats
    ]

    ledger = build_ledger(
        bets,
        inputs.sheet,
        inputs.tee_box,
        players=inputs.player_ids,
        four_ball_share=share,
    )
    breakdowns = []
    for bet in bets:
        detail = settle_breakdown(bet, inputs.sheet, inputs.tee_box)
        breakdowns.append(
            BreakdownOut(
                bet_id=detail.bet_id,
                format=detail.format.value,
                outcome=detail.outcome,
                skins_by_hole=detail.skins_by_hole,
                value_per_skin=detail.value_per_skin,
                doda_counts=detail.doda_counts,
                team_totals=[
                    TeamTotalsOut(**asdict(totals)) for totals in detail.team_totals
                ],
            )
        )
        BETS_SETTLED.labels(format=bet.bet_format.value).inc()

    SETTLEMENT_PASSES.labels(scope=scope).inc()
    logger.debug(
        "settled %d bets for game %s scope=%s", len(bets), inputs.game_id, scope
    )
    return SettlementOut(
        game_id=inputs.game_id,
        scope=scope,
        four_ball_share=share,
        ledger=ledger,
        bets=breakdowns,
    )


__all__ = ["router"]
