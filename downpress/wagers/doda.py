"""Do-Da settlement: payouts for holes made in exactly two strokes."""

from __future__ import annotations

from typing import Dict, Mapping, Sequence

from .scoresheet import HOLE_COUNT, ScoreToken, token_at

DODA_STROKES = 2


def count_dodas(row: Sequence[ScoreToken]) -> int:
    return sum(1 for index in range(HOLE_COUNT) if token_at(row, index) == DODA_STROKES)


def doda_amounts(
    player_ids: Sequence[str],
    rows: Mapping[str, Sequence[ScoreToken]],
    *,
    is_pool: bool,
    amount: float,
) -> Dict[str, float]:
    """Per-player Do-Da result for the players that have a score row.

    Pool mode: everyone antes ``amount`` and the pot is split per Do-Da.
    Per-unit mode: everyone pays ``amount`` for every Do-Da made by the field
    and each Do-Da collects from the whole field.
    """

    active = [player_id for player_id in player_ids if player_id in rows]
    counts = {player_id: count_dodas(rows[player_id]) for player_id in active}
    total = sum(counts.values())

    winnings: Dict[str, float] = {}
    if is_pool:
        pool = amount * len(active)
        for player_id in active:
            winnings[player_id] = -amount
        if total > 0:
            per_doda = pool / total
            for player_id, count in counts.items():
                if count > 0:
                    winnings[player_id] += per_doda * count
        return winnings

    cost = amount * total
    pooled = cost * len(active)
    worth = pooled / total if total > 0 else 0.0
    for player_id in active:
        winnings[player_id] = -cost
    for player_id, count in counts.items():
        if count > 0:
            winnings[player_id] += worth * count
    return winnings


__all__ = ["DODA_STROKES", "count_dodas", "doda_amounts"]
