"""Skins settlement."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Mapping, Sequence

from .scoresheet import HOLE_COUNT, ScoreToken, token_at


def skins_by_hole(
    player_ids: Sequence[str],
    rows: Mapping[str, Sequence[ScoreToken]],
) -> Dict[int, str]:
    """Map hole number (1-based) to the player who won its skin.

    Only players with a score row take part. A hole is skipped unless every one
    of them has a recorded score; a tie for low score carries no skin.
    """

    active = [player_id for player_id in player_ids if player_id in rows]
    winners: Dict[int, str] = {}
    if not active:
        return winners

    for index in range(HOLE_COUNT):
        scores = {player_id: token_at(rows[player_id], index) for player_id in active}
        if any(score is None for score in scores.values()):
            continue
        lowest = min(scores.values())
        leaders = [player_id for player_id, score in scores.items() if score == lowest]
        if len(leaders) == 1:
            winners[index + 1] = leaders[0]
    return winners


def skins_amounts(
    player_ids: Sequence[str],
    rows: Mapping[str, Sequence[ScoreToken]],
    *,
    amount: float,
) -> Dict[str, float]:
    active = [player_id for player_id in player_ids if player_id in rows]
    winnings: Dict[str, float] = {player_id: -amount for player_id in active}

    skins_won = Counter(skins_by_hole(active, rows).values())
    total_skins = sum(skins_won.values())
    if total_skins > 0:
        per_skin = amount * len(active) / total_skins
        for player_id, skins in skins_won.items():
            winnings[player_id] += per_skin * skins
    return winnings


def value_per_skin(
    player_ids: Sequence[str],
    rows: Mapping[str, Sequence[ScoreToken]],
    *,
    amount: float,
) -> float:
    active = [player_id for player_id in player_ids if player_id in rows]
    total_skins = len(skins_by_hole(active, rows))
    if total_skins == 0:
        return 0.0
    return amount * len(active) / total_skins


__all__ = ["skins_amounts", "skins_by_hole", "value_per_skin"]
