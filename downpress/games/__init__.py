"""Game sessions: roster, tee box, score sheet and bets for one round."""

from .models import Game, ScoreEntry, new_game_id
from .store import (
    SettlementInputs,
    create_game,
    get_bets,
    get_game,
    settlement_inputs,
    upsert_scores,
)

__all__ = [
    "Game",
    "ScoreEntry",
    "SettlementInputs",
    "new_game_id",
    "create_game",
    "get_bets",
    "get_game",
    "settlement_inputs",
    "upsert_scores",
]
