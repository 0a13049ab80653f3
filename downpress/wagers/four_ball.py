"""Four-ball (two-on-two better ball) match settlement."""

from __future__ import annotations

from typing import Optional, Sequence

from .individual import hole_result
from .scoresheet import FRONT_NINE, HOLE_COUNT, ScoreToken, token_at


def team_best(rows: Sequence[Sequence[ScoreToken]], index: int) -> Optional[int]:
    """Lowest recorded score among a team's rows on one hole, if any."""

    scores = [
        score for score in (token_at(row, index) for row in rows) if score is not None
    ]
    return min(scores) if scores else None


def four_ball_amount(
    team1_rows: Sequence[Sequence[ScoreToken]],
    team2_rows: Sequence[Sequence[ScoreToken]],
    pars: Sequence[int],
    *,
    per_hole_amount: float,
    per_birdie_amount: float,
    press_on_9_and_18: bool = False,
) -> float:
    """Signed amount team two owes team one.

    ``press_on_9_and_18`` is accepted for parity with the individual match but
    has no effect: front and back nines are always summed as played.
    """

    front = 0.0
    back = 0.0
    birdies1 = 0
    birdies2 = 0

    for index in range(HOLE_COUNT):
        best1 = team_best(team1_rows, index)
        best2 = team_best(team2_rows, index)
        if best1 is None or best2 is None:
            continue

        amount = hole_result(best1 - best2, per_hole_amount)
        if index in FRONT_NINE:
            front += amount
        else:
            back += amount

        par = pars[index]
        if best1 < par:
            birdies1 += 1
        if best2 < par:
            birdies2 += 1

    return front + back + (birdies1 - birdies2) * per_birdie_amount


__all__ = ["four_ball_amount", "team_best"]
