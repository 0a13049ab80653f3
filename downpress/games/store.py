from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from downpress.wagers.bets import Bet
from downpress.wagers.registry import BetRegistry
from downpress.wagers.scoresheet import (
    HOLE_COUNT,
    Player,
    ScoreSheet,
    ScoreToken,
    TeeBox,
)

from .models import Game, ScoreEntry, new_game_id

logger = logging.getLogger(__name__)

_GAMES: Dict[str, Game] = {}
_BETS: Dict[str, BetRegistry] = {}
_LOCK = Lock()


@dataclass(frozen=True, slots=True)
class SettlementInputs:
    game_id: str
    player_ids: Tuple[str, ...]
    sheet: ScoreSheet
    tee_box: TeeBox
    bets: Tuple[Bet, ...]


def create_game(
    course_name: str,
    tee_box: TeeBox,
    players: List[Player],
    course_id: Optional[str] = None,
) -> Game:
    ids = [player.id for player in players]
    if len(set(ids)) != len(ids):
        raise ValueError("duplicate player ids in roster")

    game_id = new_game_id()
    game = Game(
        id=game_id,
        created_ts=time.time(),
        course_id=course_id,
        course_name=course_name,
        tee_box=tee_box,
        players=players,
    )
    with _LOCK:
        _GAMES[game_id] = game
        _BETS[game_id] = BetRegistry()
    logger.info("created game %s with %d players", game_id, len(players))
    return game


def get_game(game_id: str) -> Optional[Game]:
    with _LOCK:
        return _GAMES.get(game_id)


def get_bets(game_id: str) -> Optional[BetRegistry]:
    with _LOCK:
        return _BETS.get(game_id)


def upsert_scores(game_id: str, entries: List[ScoreEntry]) -> Optional[Game]:
    with _LOCK:
        game = _GAMES.get(game_id)
        if not game:
            return None

        valid_player_ids = {player.id for player in game.players}
        for entry in entries:
            if (
                entry.hole < 1
                or entry.hole > HOLE_COUNT
                or entry.player_id not in valid_player_ids
            ):
                raise ValueError(
                    f"invalid score entry hole={entry.hole} player={entry.player_id}"
                )

        for entry in entries:
            row = game.scores.setdefault(entry.player_id, [None] * HOLE_COUNT)
            row[entry.hole - 1] = entry.score
        return game


def merge_rows(
    game_id: str,
    rows: Mapping[str, Sequence[ScoreToken]],
    players: Iterable[Player] = (),
) -> Optional[Game]:
    """Overwrite whole score rows, adding any players the game has not seen."""

    with _LOCK:
        game = _GAMES.get(game_id)
        if not game:
            return None

        for player_id, row in rows.items():
            if len(row) != HOLE_COUNT:
                raise ValueError(f"score row for {player_id} must have 18 entries")

        known = {player.id for player in game.players}
        for player in players:
            if player.id not in known:
                game.players.append(player)
                known.add(player.id)

        for player_id, row in rows.items():
            if player_id not in known:
                raise ValueError(f"unknown player {player_id}")
            game.scores[player_id] = list(row)
        return game


def complete_game(game_id: str) -> Optional[Game]:
    with _LOCK:
        game = _GAMES.get(game_id)
        if not game:
            return None
        game.completed = True
        return game


def delete_game(game_id: str) -> bool:
    with _LOCK:
        _BETS.pop(game_id, None)
        return _GAMES.pop(game_id, None) is not None


def settlement_inputs(game_id: str) -> Optional[SettlementInputs]:
    """Snapshot everything a settlement pass reads, under one lock."""

    with _LOCK:
        game = _GAMES.get(game_id)
        registry = _BETS.get(game_id)
        if not game or registry is None:
            return None
        return SettlementInputs(
            game_id=game_id,
            player_ids=tuple(player.id for player in game.players),
            sheet=game.score_sheet(),
            tee_box=game.tee_box,
            bets=registry.snapshot(),
        )


def freeze_inputs(game_id: str) -> Optional[Tuple[ScoreSheet, TeeBox]]:
    """Copy of the live sheet and tee box for pinning onto a bet."""

    with _LOCK:
        game = _GAMES.get(game_id)
        if not game:
            return None
        return game.score_sheet(), game.tee_box


def share_snapshot(game_id: str) -> Optional[Game]:
    with _LOCK:
        game = _GAMES.get(game_id)
        if not game:
            return None
        return game.model_copy(deep=True)


def clear_games() -> None:
    with _LOCK:
        _GAMES.clear()
        _BETS.clear()


__all__ = [
    "SettlementInputs",
    "clear_games",
    "complete_game",
    "create_game",
    "delete_game",
    "freeze_inputs",
    "get_bets",
    "get_game",
    "merge_rows",
    "settlement_inputs",
    "share_snapshot",
    "upsert_scores",
]
