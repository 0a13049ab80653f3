"""Individual (one-on-one) match settlement."""

from __future__ import annotations

from typing import Optional, Sequence

from .scoresheet import ScoreToken, token_at

# Holes 9 and 18 (indices 8 and 17) only decide the press on each nine.
_FRONT_HOLES = range(0, 8)
_BACK_HOLES = range(9, 17)
_FRONT_PRESS_HOLE = 8
_BACK_PRESS_HOLE = 17


def hole_result(diff: int, per_hole_amount: float) -> float:
    """Amount owed to side one for a single hole given ``side1 - side2``."""

    if diff < 0:
        return per_hole_amount
    if diff > 0:
        return -per_hole_amount
    return 0.0


def _nine_subtotal(
    scores1: Sequence[ScoreToken],
    scores2: Sequence[ScoreToken],
    pars: Sequence[int],
    holes: range,
    per_hole_amount: float,
    per_birdie_amount: float,
) -> float:
    winnings = 0.0
    birdies1 = 0
    birdies2 = 0
    for index in holes:
        score1 = token_at(scores1, index)
        score2 = token_at(scores2, index)
        if score1 is None or score2 is None:
            continue
        winnings += hole_result(score1 - score2, per_hole_amount)
        par = pars[index]
        if score1 < par:
            birdies1 += 1
        if score2 < par:
            birdies2 += 1
    return winnings + (birdies1 - birdies2) * per_birdie_amount


def _apply_press(
    subtotal: float,
    scores1: Sequence[ScoreToken],
    scores2: Sequence[ScoreToken],
    press_hole: int,
) -> float:
    score1: Optional[int] = token_at(scores1, press_hole)
    score2: Optional[int] = token_at(scores2, press_hole)
    if score1 is None or score2 is None:
        return subtotal
    if score1 < score2:
        return subtotal * 2
    if score1 > score2:
        return 0.0
    return subtotal


def individual_match_amount(
    scores1: Sequence[ScoreToken],
    scores2: Sequence[ScoreToken],
    pars: Sequence[int],
    *,
    per_hole_amount: float,
    per_birdie_amount: float,
    press_on_9_and_18: bool = False,
) -> float:
    """Signed amount player two owes player one (positive: player one ahead).

    Each nine is settled through its eighth hole. With the press enabled the
    ninth hole of that nine doubles the subtotal when player one wins it and
    wipes it out when player two wins it.
    """

    front = _nine_subtotal(
        scores1, scores2, pars, _FRONT_HOLES, per_hole_amount, per_birdie_amount
    )
    back = _nine_subtotal(
        scores1, scores2, pars, _BACK_HOLES, per_hole_amount, per_birdie_amount
    )
    if press_on_9_and_18:
        front = _apply_press(front, scores1, scores2, _FRONT_PRESS_HOLE)
        back = _apply_press(back, scores1, scores2, _BACK_PRESS_HOLE)
    return front + back


__all__ = ["hole_result", "individual_match_amount"]
