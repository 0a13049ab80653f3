"""Settlement dispatch and per-player aggregation across bet formats."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .alabama import AlabamaTeamTotals, alabama_amounts, alabama_team_totals
from .bets import (
    HEAD_TO_HEAD_FORMATS,
    AlabamaBet,
    Bet,
    BetFormat,
    DoDaBet,
    FourBallMatchBet,
    IndividualMatchBet,
    SkinsBet,
)
from .doda import count_dodas, doda_amounts
from .four_ball import four_ball_amount
from .individual import individual_match_amount
from .scoresheet import ScoreSheet, TeeBox
from .skins import skins_amounts, skins_by_hole, value_per_skin

Outcome = Union[float, Dict[str, float]]


class FourBallShare(str, Enum):
    """How a four-ball result is carried onto each teammate's ledger line."""

    FULL = "full"
    SPLIT = "split"


def resolve_inputs(
    bet: Bet, sheet: ScoreSheet, tee_box: TeeBox
) -> Tuple[ScoreSheet, TeeBox]:
    """Prefer the bet's own frozen snapshot over the live sheet and tee box."""

    scores = bet.scores if bet.scores is not None else sheet
    tees = bet.tee_box if bet.tee_box is not None else tee_box
    return scores, tees


def _settle_individual(
    bet: IndividualMatchBet, sheet: ScoreSheet, tee_box: TeeBox
) -> float:
    return individual_match_amount(
        sheet.row(bet.player1.id),
        sheet.row(bet.player2.id),
        tee_box.pars,
        per_hole_amount=bet.per_hole_amount,
        per_birdie_amount=bet.per_birdie_amount,
        press_on_9_and_18=bet.press_on_9_and_18,
    )


def _settle_four_ball(
    bet: FourBallMatchBet, sheet: ScoreSheet, tee_box: TeeBox
) -> float:
    return four_ball_amount(
        [sheet.row(player.id) for player in bet.team1],
        [sheet.row(player.id) for player in bet.team2],
        tee_box.pars,
        per_hole_amount=bet.per_hole_amount,
        per_birdie_amount=bet.per_birdie_amount,
        press_on_9_and_18=bet.press_on_9_and_18,
    )


def _settle_alabama(
    bet: AlabamaBet, sheet: ScoreSheet, tee_box: TeeBox
) -> Dict[str, float]:
    return alabama_amounts(
        bet.team_ids(),
        sheet.rows,
        tee_box.pars,
        counting_scores=bet.counting_scores,
        front_nine_amount=bet.front_nine_amount,
        back_nine_amount=bet.back_nine_amount,
        low_ball_amount=bet.low_ball_amount,
        per_birdie_amount=bet.per_birdie_amount,
        swing_man_id=bet.swing_man.id if bet.swing_man else None,
    )


def _settle_doda(
    bet: DoDaBet, sheet: ScoreSheet, tee_box: TeeBox
) -> Dict[str, float]:
    return doda_amounts(
        bet.participant_ids(), sheet.rows, is_pool=bet.is_pool, amount=bet.amount
    )


def _settle_skins(
    bet: SkinsBet, sheet: ScoreSheet, tee_box: TeeBox
) -> Dict[str, float]:
    return skins_amounts(bet.participant_ids(), sheet.rows, amount=bet.amount)


_CALCULATORS: Dict[BetFormat, Callable[..., Outcome]] = {
    BetFormat.INDIVIDUAL: _settle_individual,
    BetFormat.FOUR_BALL: _settle_four_ball,
    BetFormat.ALABAMA: _settle_alabama,
    BetFormat.DODA: _settle_doda,
    BetFormat.SKINS: _settle_skins,
}


def settle(bet: Bet, sheet: ScoreSheet, tee_box: TeeBox) -> Outcome:
    """Evaluate one bet instance.

    Head-to-head formats return a single amount in favour of player/team one;
    pool formats return a mapping of player id to signed amount.
    """

    calculator = _CALCULATORS.get(bet.bet_format)
    if calculator is None:
        raise TypeError(f"unsupported bet format: {bet.bet_format!r}")
    scores, tees = resolve_inputs(bet, sheet, tee_box)
    return calculator(bet, scores, tees)


def player_share(
    bet: Bet,
    outcome: Outcome,
    player_id: str,
    *,
    four_ball_share: FourBallShare = FourBallShare.FULL,
) -> float:
    """Signed amount ``player_id`` carries from one settled bet."""

    if isinstance(bet, IndividualMatchBet):
        if bet.player1.id == player_id:
            return float(outcome)  # type: ignore[arg-type]
        if bet.player2.id == player_id:
            return -float(outcome)  # type: ignore[arg-type]
        return 0.0

    if isinstance(bet, FourBallMatchBet):
        team = bet.team_of(player_id)
        if team is None:
            return 0.0
        amount = float(outcome)  # type: ignore[arg-type]
        if FourBallShare(four_ball_share) is FourBallShare.SPLIT:
            amount = split_four_ball(amount)
        return amount if team == 1 else -amount

    return outcome.get(player_id, 0.0)  # type: ignore[union-attr]


def split_four_ball(amount: float) -> float:
    """Per-teammate share of a four-ball result when the pair splits it."""

    return amount / 2


def _selected(
    bets: Iterable[Bet], formats: Optional[Iterable[BetFormat]]
) -> List[Bet]:
    if formats is None:
        return list(bets)
    wanted = {BetFormat(fmt) for fmt in formats}
    return [bet for bet in bets if bet.bet_format in wanted]


def build_ledger(
    bets: Iterable[Bet],
    sheet: ScoreSheet,
    tee_box: TeeBox,
    *,
    players: Iterable[str] = (),
    four_ball_share: FourBallShare = FourBallShare.FULL,
    formats: Optional[Iterable[BetFormat]] = None,
) -> Dict[str, float]:
    """Fold every bet's outcome into one running total per player."""

    ledger: Dict[str, float] = {player_id: 0.0 for player_id in players}
    for bet in _selected(bets, formats):
        outcome = settle(bet, sheet, tee_box)
        for player_id in bet.participant_ids():
            ledger[player_id] = ledger.get(player_id, 0.0) + player_share(
                bet, outcome, player_id, four_ball_share=four_ball_share
            )
    return ledger


def player_total(
    player_id: str,
    bets: Iterable[Bet],
    sheet: ScoreSheet,
    tee_box: TeeBox,
    *,
    four_ball_share: FourBallShare = FourBallShare.FULL,
    formats: Optional[Iterable[BetFormat]] = None,
) -> float:
    total = 0.0
    for bet in _selected(bets, formats):
        if player_id not in bet.participant_ids():
            continue
        outcome = settle(bet, sheet, tee_box)
        total += player_share(bet, outcome, player_id, four_ball_share=four_ball_share)
    return total


def round_winnings(
    player_id: str,
    bets: Iterable[Bet],
    sheet: ScoreSheet,
    tee_box: TeeBox,
    *,
    four_ball_share: FourBallShare = FourBallShare.FULL,
) -> float:
    """Running total shown during play: head-to-head matches only."""

    return player_total(
        player_id,
        bets,
        sheet,
        tee_box,
        four_ball_share=four_ball_share,
        formats=HEAD_TO_HEAD_FORMATS,
    )


@dataclass(slots=True)
class BetBreakdown:
    bet_id: str
    format: BetFormat
    outcome: Outcome
    skins_by_hole: Dict[int, str] = field(default_factory=dict)
    value_per_skin: Optional[float] = None
    doda_counts: Dict[str, int] = field(default_factory=dict)
    team_totals: List[AlabamaTeamTotals] = field(default_factory=list)


def settle_breakdown(bet: Bet, sheet: ScoreSheet, tee_box: TeeBox) -> BetBreakdown:
    """Outcome plus the per-format detail a scorecard screen displays."""

    scores, tees = resolve_inputs(bet, sheet, tee_box)
    breakdown = BetBreakdown(
        bet_id=bet.id, format=bet.bet_format, outcome=settle(bet, scores, tees)
    )

    if isinstance(bet, SkinsBet):
        ids = bet.participant_ids()
        breakdown.skins_by_hole = skins_by_hole(ids, scores.rows)
        breakdown.value_per_skin = value_per_skin(ids, scores.rows, amount=bet.amount)
    elif isinstance(bet, DoDaBet):
        breakdown.doda_counts = {
            player_id: count_dodas(scores.row(player_id))
            for player_id in bet.participant_ids()
            if scores.has_player(player_id)
        }
    elif isinstance(bet, AlabamaBet):
        breakdown.team_totals = alabama_team_totals(
            bet.team_ids(),
            scores.rows,
            tees.pars,
            counting_scores=bet.counting_scores,
            swing_man_id=bet.swing_man.id if bet.swing_man else None,
        )
    return breakdown


__all__ = [
    "BetBreakdown",
    "FourBallShare",
    "Outcome",
    "build_ledger",
    "player_share",
    "player_total",
    "resolve_inputs",
    "round_winnings",
    "settle",
    "settle_breakdown",
    "split_four_ball",
]
