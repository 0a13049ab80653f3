"""Alabama team game settlement.

Every team posts two numbers per nine: the sum of its best ``counting_scores``
scores on each hole (the "Alabama" total) and its single best score on each
hole (the low ball). Teams are compared pairwise; each pairing is worth the
front rate, the back rate, the low-ball rate once per nine and the birdie
differential. An optional swing man plays for every team at once: the swing
score joins each team's pool of scores and the swing man collects every team's
result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from .scoresheet import EMPTY_ROW, FRONT_NINE, HOLE_COUNT, ScoreToken, token_at


@dataclass(slots=True)
class AlabamaTeamTotals:
    front_total: int = 0
    back_total: int = 0
    front_low_ball: int = 0
    back_low_ball: int = 0
    birdies: int = 0


def _compare(mine: int, theirs: int, rate: float) -> float:
    if mine < theirs:
        return rate
    if mine > theirs:
        return -rate
    return 0.0


def alabama_team_totals(
    teams: Sequence[Sequence[str]],
    rows: Mapping[str, Sequence[ScoreToken]],
    pars: Sequence[int],
    *,
    counting_scores: int,
    swing_man_id: Optional[str] = None,
) -> List[AlabamaTeamTotals]:
    """Accumulate per-team nine totals, low balls and birdie counts."""

    totals = [AlabamaTeamTotals() for _ in teams]

    for index in range(HOLE_COUNT):
        par = pars[index]
        for team_index, team in enumerate(teams):
            members = list(team)
            if swing_man_id is not None:
                members.append(swing_man_id)

            scores: List[int] = []
            for player_id in members:
                score = token_at(rows.get(player_id, EMPTY_ROW), index)
                if score is None:
                    continue
                scores.append(score)
                if score < par:
                    totals[team_index].birdies += 1

            if not scores:
                continue
            scores.sort()
            hole_total = sum(scores[: min(counting_scores, len(scores))])
            low_ball = scores[0]

            if index in FRONT_NINE:
                totals[team_index].front_total += hole_total
                totals[team_index].front_low_ball += low_ball
            else:
                totals[team_index].back_total += hole_total
                totals[team_index].back_low_ball += low_ball

    return totals


def alabama_team_amounts(
    totals: Sequence[AlabamaTeamTotals],
    *,
    front_nine_amount: float,
    back_nine_amount: float,
    low_ball_amount: float,
    per_birdie_amount: float,
) -> List[float]:
    amounts: List[float] = []
    for team_index, mine in enumerate(totals):
        amount = 0.0
        for other_index, theirs in enumerate(totals):
            if other_index == team_index:
                continue
            amount += _compare(mine.front_total, theirs.front_total, front_nine_amount)
            amount += _compare(mine.back_total, theirs.back_total, back_nine_amount)
            amount += _compare(
                mine.front_low_ball, theirs.front_low_ball, low_ball_amount
            )
            amount += _compare(
                mine.back_low_ball, theirs.back_low_ball, low_ball_amount
            )
            amount += (mine.birdies - theirs.birdies) * per_birdie_amount
        amounts.append(amount)
    return amounts


def alabama_amounts(
    teams: Sequence[Sequence[str]],
    rows: Mapping[str, Sequence[ScoreToken]],
    pars: Sequence[int],
    *,
    counting_scores: int,
    front_nine_amount: float,
    back_nine_amount: float,
    low_ball_amount: float,
    per_birdie_amount: float,
    swing_man_id: Optional[str] = None,
) -> Dict[str, float]:
    """Per-player result; each member collects the full team amount."""

    totals = alabama_team_totals(
        teams,
        rows,
        pars,
        counting_scores=counting_scores,
        swing_man_id=swing_man_id,
    )
    team_amounts = alabama_team_amounts(
        totals,
        front_nine_amount=front_nine_amount,
        back_nine_amount=back_nine_amount,
        low_ball_amount=low_ball_amount,
        per_birdie_amount=per_birdie_amount,
    )

    winnings: Dict[str, float] = {}
    for team, amount in zip(teams, team_amounts):
        for player_id in team:
            winnings[player_id] = winnings.get(player_id, 0.0) + amount
        if swing_man_id is not None:
            winnings[swing_man_id] = winnings.get(swing_man_id, 0.0) + amount
    return winnings


__all__ = [
    "AlabamaTeamTotals",
    "alabama_amounts",
    "alabama_team_amounts",
    "alabama_team_totals",
]
